"""Query Translator — list parameters to a storage filter and sort directive.

Invariants:
    - translate is PURE and never raises
    - filters contains only status/priority, and only when non-empty
    - Sort direction defaults to DESCENDING; unknown `order` values fall back to it
    - sortBy is passed through verbatim (the storage collaborator decides what
      an unknown field means)
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from bug_tracker.core.domain_types import SortDirection
from bug_tracker.core.record_schema import DEFAULT_SORT_FIELD

FILTER_FIELDS: tuple[str, ...] = ("status", "priority")

_ORDER_VALUES: dict[str, SortDirection] = {
    "asc": SortDirection.ASCENDING,
    "desc": SortDirection.DESCENDING,
}


@dataclass(frozen=True)
class SortDirective:
    field: str = DEFAULT_SORT_FIELD
    direction: SortDirection = SortDirection.DESCENDING


@dataclass(frozen=True)
class ListQuery:
    filters: dict[str, str] = field(default_factory=dict)
    sort: SortDirective = field(default_factory=SortDirective)


def translate(params: Mapping[str, Any]) -> ListQuery:
    """Build a ListQuery from status/priority/sortBy/order parameters."""
    filters = {
        name: params[name] for name in FILTER_FIELDS if params.get(name)
    }
    sort_field = params.get("sortBy") or DEFAULT_SORT_FIELD
    direction = _ORDER_VALUES.get(
        str(params.get("order")), SortDirection.DESCENDING,
    )
    return ListQuery(filters=filters, sort=SortDirective(sort_field, direction))

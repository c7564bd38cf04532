"""Record Schema — field set, defaults and limits of a bug record.

Invariants:
    - INPUT_FIELDS is the only set of keys a client may supply
    - MUTABLE_FIELDS excludes reporter (immutable after creation)
    - LENGTH_LIMITS bounds are inclusive and apply to stripped text
    - apply_defaults never overwrites a supplied value

Design Decisions:
    - Plain module constants over a class: every other core module only needs
      lookups, not behavior
    - Python attribute names (snake_case) are canonical inside the core;
      SORT_FIELD_ALIASES maps wire names like "createdAt" onto them
"""

from typing import Any, Mapping

from bug_tracker.core.domain_types import BugPriority, BugStatus


# ─── Field Sets ──────────────────────────────────────────────────

INPUT_FIELDS: tuple[str, ...] = (
    "title", "description", "status", "priority", "reporter", "assignee",
)
MUTABLE_FIELDS: frozenset[str] = frozenset(
    {"title", "description", "status", "priority", "assignee"},
)

# Every attribute a stored record carries, in rendering order
RECORD_FIELDS: tuple[str, ...] = (
    "id", "title", "description", "status", "priority",
    "reporter", "assignee", "created_at", "updated_at",
)


# ─── Values & Limits ─────────────────────────────────────────────

STATUS_VALUES: tuple[str, ...] = tuple(s.value for s in BugStatus)
PRIORITY_VALUES: tuple[str, ...] = tuple(p.value for p in BugPriority)

DEFAULTS: dict[str, Any] = {
    "status": BugStatus.OPEN.value,
    "priority": BugPriority.MEDIUM.value,
    "assignee": None,
}

LENGTH_LIMITS: dict[str, tuple[int, int]] = {
    "title": (3, 100),
    "description": (10, 1000),
    "reporter": (2, 50),
    "assignee": (2, 50),
}

DEFAULT_SORT_FIELD = "createdAt"

SORT_FIELD_ALIASES: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def apply_defaults(partial: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of partial with DEFAULTS filled in where absent."""
    record = dict(DEFAULTS)
    record.update(partial)
    return record


def mutable_only(partial: Mapping[str, Any]) -> dict[str, Any]:
    """Drop fields that may not change after creation."""
    return {k: v for k, v in partial.items() if k in MUTABLE_FIELDS}

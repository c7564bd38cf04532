"""Record Validator — pydantic input models producing a list of violations.

Invariants:
    - validate is PURE: returns violations, never raises, never mutates input
    - All violations are accumulated; evaluation never stops at the first failure
    - Violations are ordered by field order (title, description, status,
      priority, reporter, assignee), at most one per field
    - Empty list means the candidate is valid for the given mode
    - Violation.to_dict is always JSON-encodable and bounded in size

Design Decisions:
    - BugCreate / BugUpdate carry the field rules; pydantic collects every
      field error, which is then mapped onto the client-facing messages
    - Absent values (missing, None, blank text) are dropped before model
      validation, so a blank required field reports "is required"
    - Text is stripped before the length bounds apply, so a caller may pass raw input
    - status is not a BugCreate field; on create the record-level
      validate_stored_enums check covers a client-supplied status
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from bug_tracker.core.domain_types import BugPriority, BugStatus
from bug_tracker.core.record_schema import (
    INPUT_FIELDS, LENGTH_LIMITS, PRIORITY_VALUES, STATUS_VALUES,
)

# Longest client string echoed back in a violation
ECHO_LIMIT = 100


class ValidationMode(str, Enum):
    """Which operation the candidate is validated for."""
    CREATE = "create"
    UPDATE = "update"


@dataclass(frozen=True)
class Violation:
    """A single field-rule failure."""
    field: str
    message: str
    value: Any = None

    def to_dict(self) -> dict:
        return {
            "field": self.field,
            "message": self.message,
            "value": echo_value(self.value),
        }


def echo_value(value: Any) -> Any:
    """JSON-safe, size-bounded copy of a client value for error bodies."""
    if isinstance(value, float) and not math.isfinite(value):
        return repr(value)
    if isinstance(value, str) and len(value) > ECHO_LIMIT:
        return value[:ECHO_LIMIT] + "..."
    if isinstance(value, Mapping):
        return {str(k): echo_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [echo_value(v) for v in value]
    return value


# ─── Input Models ────────────────────────────────────────────────

def _bounded(name: str, default: Any = ...) -> Any:
    low, high = LENGTH_LIMITS[name]
    return Field(default, min_length=low, max_length=high)


class _BugInput(BaseModel):
    """Shared pre-processing for bug input models."""

    @model_validator(mode="before")
    @classmethod
    def drop_absent(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if not _is_absent(v)}
        return data

    @field_validator(
        "title", "description", "reporter", "assignee",
        mode="before", check_fields=False,
    )
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class BugCreate(_BugInput):
    """Bug creation — title, description and reporter required."""
    title: str = _bounded("title")
    description: str = _bounded("description")
    priority: BugPriority | None = None
    reporter: str = _bounded("reporter")
    assignee: str | None = _bounded("assignee", None)


class BugUpdate(_BugInput):
    """Bug update — every field optional, reporter not accepted."""
    title: str | None = _bounded("title", None)
    description: str | None = _bounded("description", None)
    status: BugStatus | None = None
    priority: BugPriority | None = None
    assignee: str | None = _bounded("assignee", None)


class StoredEnums(BaseModel):
    """Enum columns of a complete record about to be persisted."""
    status: BugStatus | None = None
    priority: BugPriority | None = None


_MODELS: dict[ValidationMode, type[BaseModel]] = {
    ValidationMode.CREATE: BugCreate,
    ValidationMode.UPDATE: BugUpdate,
}


# ─── Messages ────────────────────────────────────────────────────

_LABELS: dict[str, str] = {
    "title": "Title",
    "description": "Description",
    "status": "Status",
    "priority": "Priority",
    "reporter": "Reporter name",
    "assignee": "Assignee name",
}

_CHOICES: dict[str, tuple[str, ...]] = {
    "status": STATUS_VALUES,
    "priority": PRIORITY_VALUES,
}


def _message(field: str, error_type: str) -> str:
    label = _LABELS[field]
    if error_type == "missing":
        return f"{label} is required"
    if field in _CHOICES:
        return f"{label} must be one of: {', '.join(_CHOICES[field])}"
    if error_type == "string_type":
        return f"{label} must be a string"
    low, high = LENGTH_LIMITS[field]
    return f"{label} must be between {low} and {high} characters"


# ─── Validation ──────────────────────────────────────────────────

def validate(
    candidate: Mapping[str, Any], mode: ValidationMode,
) -> list[Violation]:
    """Collect every violation of the mode's input model for candidate."""
    return _violations(_MODELS[mode], candidate)


def validate_stored_enums(record: Mapping[str, Any]) -> list[Violation]:
    """Check a complete record's status/priority before it is persisted."""
    return _violations(StoredEnums, record)


def _violations(
    model: type[BaseModel], candidate: Mapping[str, Any],
) -> list[Violation]:
    try:
        model.model_validate(dict(candidate))
    except ValidationError as exc:
        by_field: dict[str, Violation] = {}
        for error in exc.errors():
            field = str(error["loc"][0])
            if field in by_field:
                continue
            by_field[field] = Violation(
                field, _message(field, error["type"]), candidate.get(field),
            )
        return sorted(by_field.values(), key=lambda v: INPUT_FIELDS.index(v.field))
    return []


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

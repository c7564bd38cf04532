"""Sanitizer — reduces untrusted input to trimmed, recognized record fields.

Invariants:
    - PURE: never raises, never mutates its argument
    - Output keys are a subset of INPUT_FIELDS
    - A field is kept iff present with a truthy value after stripping
    - Idempotent: sanitize(sanitize(x)) == sanitize(x)

Design Decisions:
    - Define-if-present: an empty or whitespace-only string removes the field
      from the mutation instead of setting it to "". This means an update
      cannot clear `assignee` by sending "".
    - Non-text values pass through untouched; the Validator reports them
"""

from typing import Any, Mapping

from bug_tracker.core.record_schema import INPUT_FIELDS


def sanitize(raw_input: Mapping[str, Any] | None) -> dict[str, Any]:
    """Strip text values and drop unknown or empty fields."""
    if not isinstance(raw_input, Mapping):
        return {}
    sanitized: dict[str, Any] = {}
    for name in INPUT_FIELDS:
        value = raw_input.get(name)
        if isinstance(value, str):
            value = value.strip()
        if value:
            sanitized[name] = value
    return sanitized

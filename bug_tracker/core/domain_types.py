"""Domain Types — identity and enum types for bug records.

Invariants:
    - BugId wraps the storage-assigned UUID
    - All valid status/priority values encoded as Enums (no raw string lists elsewhere)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders; values match the wire format
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

BugId = NewType("BugId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class BugStatus(str, Enum):
    """Bug lifecycle states, maps to DB `status` column."""
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


class BugPriority(str, Enum):
    """Bug priority levels, maps to DB `priority` column."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SortDirection(str, Enum):
    """Sort direction accepted by the storage collaborator."""
    ASCENDING = "asc"
    DESCENDING = "desc"

"""Boundary Protocols — contract between the Record Service and storage.

Invariants:
    - Core NEVER imports from infrastructure; dependency arrows point inward only
    - Records cross this boundary as plain dicts keyed by RECORD_FIELDS
    - Three distinct outcomes: missing record (None / False), malformed id
      (MalformedIdError), anything else (any other exception)

Design Decisions:
    - Protocol over ABC: structural subtyping; tests pass an in-memory fake
    - Ids are passed as raw strings: only storage knows its identifier format
"""

from typing import Any, Protocol

from bug_tracker.core.query_translate import SortDirective


class MalformedIdError(ValueError):
    """Raised by storage when an id is not in its identifier format."""
    def __init__(self, raw_id: str):
        super().__init__(f"Malformed identifier: {raw_id!r}")
        self.raw_id = raw_id


class BugRepository(Protocol):
    """Contract for bug persistence, implemented by infrastructure."""
    async def insert(self, data: dict[str, Any]) -> dict: ...
    async def find(
        self, filters: dict[str, str], sort: SortDirective,
    ) -> list[dict]: ...
    async def get(self, bug_id: str) -> dict | None: ...
    async def update(self, bug_id: str, fields: dict[str, Any]) -> dict | None: ...
    async def delete(self, bug_id: str) -> bool: ...

"""Record Service — sanitize, validate, persist and map errors for bug records.

Invariants:
    - Stateless: no cache, no session; every call derives from inputs + storage
    - Invalid input never reaches storage (validation precedes every write)
    - created_at == updated_at at creation; updated_at re-set on every update
    - Only MUTABLE_FIELDS are ever written by update (reporter is dropped)
    - Every storage failure leaves as exactly one of InvalidIdentifierError,
      NotFoundError or StorageFailureError; domain errors pass through unchanged

Design Decisions:
    - Impureim sandwich: pure core (sanitize/validate/translate) around one
      awaited repository call per operation
    - Clock injected: tests drive timestamps deterministically
    - No locking on update: last write wins, delegated to storage atomicity
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Mapping

from bug_tracker.core.errors import (
    BugTrackerError, InvalidIdentifierError, NotFoundError,
    StorageFailureError, ValidationFailedError,
)
from bug_tracker.core.query_translate import translate
from bug_tracker.core.record_schema import apply_defaults, mutable_only
from bug_tracker.core.repository_protocols import BugRepository, MalformedIdError
from bug_tracker.core.sanitize import sanitize
from bug_tracker.core.validate_record import (
    ValidationMode, validate, validate_stored_enums,
)

logger = logging.getLogger(__name__)

RESOURCE = "Bug"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BugService:
    """The five bug operations against a BugRepository."""

    def __init__(
        self,
        repository: BugRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.clock = clock

    async def list_bugs(self, params: Mapping[str, Any]) -> list[dict]:
        """Return every record matching the filter, in the requested order."""
        query = translate(params)
        with _storage_errors("find"):
            bugs = await self.repository.find(query.filters, query.sort)
        logger.info(f"Found {len(bugs)} bugs", extra={"count": len(bugs)})
        return bugs

    async def get_bug(self, bug_id: str) -> dict:
        with _storage_errors("get"):
            bug = await self.repository.get(bug_id)
        if bug is None:
            raise NotFoundError(RESOURCE, bug_id)
        return bug

    async def create_bug(self, raw_input: Mapping[str, Any]) -> dict:
        """Sanitize, validate (create mode), apply defaults and insert."""
        data = sanitize(raw_input)
        violations = validate(data, ValidationMode.CREATE)
        if not violations:
            data = apply_defaults(data)
            violations = validate_stored_enums(data)
        if violations:
            raise ValidationFailedError(violations)

        now = self.clock()
        data["created_at"] = now
        data["updated_at"] = now
        with _storage_errors("insert"):
            bug = await self.repository.insert(data)
        logger.info(
            f"Bug created: {bug['title']}", extra={"bug_id": str(bug["id"])},
        )
        return bug

    async def update_bug(self, bug_id: str, raw_input: Mapping[str, Any]) -> dict:
        """Partial merge of the sanitized mutable fields onto an existing record."""
        fields = mutable_only(sanitize(raw_input))
        violations = validate(fields, ValidationMode.UPDATE)
        if violations:
            raise ValidationFailedError(violations)

        fields["updated_at"] = self.clock()
        with _storage_errors("update"):
            bug = await self.repository.update(bug_id, fields)
        if bug is None:
            raise NotFoundError(RESOURCE, bug_id)
        logger.info(f"Bug updated: {bug['title']}", extra={"bug_id": bug_id})
        return bug

    async def delete_bug(self, bug_id: str) -> None:
        """Hard delete. No tombstone is kept."""
        with _storage_errors("delete"):
            deleted = await self.repository.delete(bug_id)
        if not deleted:
            raise NotFoundError(RESOURCE, bug_id)
        logger.info("Bug deleted", extra={"bug_id": bug_id})


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """Translate storage-layer exceptions into the domain taxonomy."""
    try:
        yield
    except MalformedIdError as e:
        raise InvalidIdentifierError(RESOURCE, e.raw_id) from e
    except BugTrackerError:
        raise
    except Exception as e:
        logger.error(
            f"Storage {operation} failed: {e}",
            extra={"operation": operation},
        )
        raise StorageFailureError(str(e), operation) from e

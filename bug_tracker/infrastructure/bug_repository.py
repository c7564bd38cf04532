"""SQL Bug Repository — BugRepository implementation over an AsyncSession.

Invariants:
    - Ids are parsed as UUID; anything else raises MalformedIdError before any query
    - Missing rows reported as None (get/update) or False (delete), never raised
    - Each write commits its own transaction
    - Returned timestamps are timezone-aware UTC (SQLite drops tzinfo on read)

Design Decisions:
    - Unknown sort fields add no ORDER BY clause: rows come back in storage
      order, the same as sorting on a field no record carries
    - id is always the final ORDER BY key so equal sort values stay stable
    - update is load-modify-commit without row locks (last write wins)
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, select
from sqlalchemy.ext.asyncio import AsyncSession

from bug_tracker.core.domain_types import BugId, SortDirection
from bug_tracker.core.query_translate import SortDirective
from bug_tracker.core.record_schema import SORT_FIELD_ALIASES
from bug_tracker.core.repository_protocols import MalformedIdError
from bug_tracker.models.bug import Bug

logger = logging.getLogger(__name__)


class SqlBugRepository:
    """Bug persistence backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, data: dict[str, Any]) -> dict:
        bug = Bug(**data)
        self.db.add(bug)
        await self.db.commit()
        await self.db.refresh(bug)
        return _to_record(bug)

    async def find(
        self, filters: dict[str, str], sort: SortDirective,
    ) -> list[dict]:
        query = select(Bug)
        for name, value in filters.items():
            column = _column(name)
            if column is not None:
                query = query.where(column == value)

        sort_column = _column(SORT_FIELD_ALIASES.get(sort.field, sort.field))
        if sort_column is None:
            logger.debug(f"Unknown sort field '{sort.field}', storage order used")
        elif sort.direction == SortDirection.ASCENDING:
            query = query.order_by(sort_column.asc())
        else:
            query = query.order_by(sort_column.desc())
        query = query.order_by(Bug.id)

        result = await self.db.execute(query)
        return [_to_record(bug) for bug in result.scalars().all()]

    async def get(self, bug_id: str) -> dict | None:
        bug = await self.db.get(Bug, _parse_id(bug_id))
        return _to_record(bug) if bug else None

    async def update(self, bug_id: str, fields: dict[str, Any]) -> dict | None:
        bug = await self.db.get(Bug, _parse_id(bug_id))
        if not bug:
            return None
        for name, value in fields.items():
            setattr(bug, name, value)
        await self.db.commit()
        await self.db.refresh(bug)
        return _to_record(bug)

    async def delete(self, bug_id: str) -> bool:
        bug = await self.db.get(Bug, _parse_id(bug_id))
        if not bug:
            return False
        await self.db.delete(bug)
        await self.db.commit()
        return True


def _parse_id(bug_id: str) -> BugId:
    try:
        return BugId(uuid.UUID(str(bug_id)))
    except ValueError:
        raise MalformedIdError(bug_id)


def _column(name: str) -> Column | None:
    return Bug.__table__.columns.get(name)


def _to_record(bug: Bug) -> dict:
    record = bug.to_dict()
    for key in ("created_at", "updated_at"):
        record[key] = _as_utc(record[key])
    return record


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

"""Bug ORM — persists bug records in the `bugs` table.

Invariants:
    - id is a UUID primary key assigned on insert
    - title, description, reporter are non-nullable text
    - status/priority store enum values as strings (validated before write)
    - created_at is written once; updated_at on every mutation

Design Decisions:
    - Generic Uuid type: same model runs on PostgreSQL and on SQLite in tests
    - Timestamps are set by BugService, not by column defaults, so
      created_at == updated_at holds exactly at creation
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from bug_tracker.core.domain_types import BugPriority, BugStatus
from bug_tracker.core.record_schema import RECORD_FIELDS
from bug_tracker.db.base import Base


class Bug(Base):
    """A tracked bug."""
    __tablename__ = "bugs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BugStatus.OPEN.value, index=True,
    )
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=BugPriority.MEDIUM.value, index=True,
    )
    reporter: Mapped[str] = mapped_column(String(50), nullable=False)
    assignee: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in RECORD_FIELDS}

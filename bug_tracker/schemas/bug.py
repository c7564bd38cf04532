"""Bug Schemas — Pydantic models rendering records and envelopes for the API.

Invariants:
    - Wire keys are camelCase (createdAt, updatedAt); Python attrs stay snake_case
    - Every success envelope carries success=True
    - Request bodies are NOT modelled here: they go through sanitize/validate
      so define-if-present and violation accumulation apply

Design Decisions:
    - alias_generator=to_camel with populate_by_name: services hand over
      snake_case dicts, responses dump by_alias
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BugResponse(BaseModel):
    """Public-facing bug record."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    title: str
    description: str
    status: str
    priority: str
    reporter: str
    assignee: str | None = None
    created_at: datetime
    updated_at: datetime


class BugEnvelope(BaseModel):
    success: bool = True
    data: BugResponse


class BugListEnvelope(BaseModel):
    success: bool = True
    count: int
    data: list[BugResponse]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str


def render_bug(record: dict) -> dict:
    """Single-record success envelope."""
    envelope = BugEnvelope(data=BugResponse.model_validate(record))
    return envelope.model_dump(by_alias=True, mode="json")


def render_bug_list(records: list[dict]) -> dict:
    """List success envelope with count."""
    envelope = BugListEnvelope(
        count=len(records),
        data=[BugResponse.model_validate(r) for r in records],
    )
    return envelope.model_dump(by_alias=True, mode="json")

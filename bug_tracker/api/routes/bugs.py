"""Bug Routes — thin HTTP binding for the five BugService operations.

Invariants:
    - Routes never validate or mutate records themselves; BugService does
    - Domain errors propagate to the global handlers (api/error_handlers.py)
    - Ids are taken as raw strings so a malformed id reaches storage and
      comes back as InvalidIdentifierError (400), distinct from 404
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bug_tracker.infrastructure.bug_repository import SqlBugRepository
from bug_tracker.infrastructure.database import get_db
from bug_tracker.schemas.bug import MessageEnvelope, render_bug, render_bug_list
from bug_tracker.services.bug_service import BugService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/bugs", tags=["bugs"])


def get_bug_service(db: AsyncSession = Depends(get_db)) -> BugService:
    """FastAPI dependency: a BugService bound to the request's DB session."""
    return BugService(SqlBugRepository(db))


@router.get("")
async def list_bugs(
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    order: str | None = Query(None),
    service: BugService = Depends(get_bug_service),
):
    """List bugs, optionally filtered by status/priority and sorted."""
    bugs = await service.list_bugs({
        "status": status_filter,
        "priority": priority,
        "sortBy": sort_by,
        "order": order,
    })
    return render_bug_list(bugs)


@router.get("/{bug_id}")
async def get_bug(
    bug_id: str, service: BugService = Depends(get_bug_service),
):
    return render_bug(await service.get_bug(bug_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_bug(
    body: dict[str, Any] = Body(...),
    service: BugService = Depends(get_bug_service),
):
    """Create a bug. status/priority default to open/medium."""
    return render_bug(await service.create_bug(body))


@router.put("/{bug_id}")
async def update_bug(
    bug_id: str,
    body: dict[str, Any] = Body(...),
    service: BugService = Depends(get_bug_service),
):
    """Partial update. Empty fields are ignored; reporter cannot change."""
    return render_bug(await service.update_bug(bug_id, body))


@router.delete("/{bug_id}", response_model=MessageEnvelope)
async def delete_bug(
    bug_id: str, service: BugService = Depends(get_bug_service),
):
    await service.delete_bug(bug_id)
    return MessageEnvelope(message="Bug deleted successfully")

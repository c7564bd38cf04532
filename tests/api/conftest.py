"""API test fixtures — FastAPI test client over in-memory SQLite.

Invariants:
    - get_db dependency overridden to use the test DB session
    - get_bug_service overridden to share one TickingClock per test, so
      createdAt ordering is deterministic
    - db_manager patched so readiness probes see the test engine
"""

import pytest
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

import bug_tracker.infrastructure.database as db_module
from bug_tracker.api.routes.bugs import get_bug_service
from bug_tracker.infrastructure.bug_repository import SqlBugRepository
from bug_tracker.infrastructure.database import DatabaseSessionManager, get_db
from bug_tracker.main import app
from bug_tracker.services.bug_service import BugService

from tests.services.fake_repository import TickingClock


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB and service dependencies overridden."""
    clock = TickingClock()

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    def override_get_bug_service(db: AsyncSession = Depends(get_db)):
        return BugService(SqlBugRepository(db), clock=clock)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_bug_service] = override_get_bug_service

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager

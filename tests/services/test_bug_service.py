"""Bug Service — sanitize → validate → storage → error mapping for all five operations.

Invariants:
    - Invalid create/update input never reaches storage
    - created_at == updated_at at creation; updated_at strictly increases on update
    - Partial update keeps every unspecified field
    - MalformedIdError → InvalidIdentifierError; missing rows → NotFoundError;
      any other storage exception → StorageFailureError
"""

import uuid

import pytest

from bug_tracker.core.errors import (
    InvalidIdentifierError, NotFoundError, StorageFailureError,
    ValidationFailedError,
)
from bug_tracker.services.bug_service import BugService

from tests.services.fake_repository import FakeBugRepository, TickingClock

SAFARI_BUG = {
    "title": "Login button broken",
    "description": "Clicking login does nothing on Safari",
    "reporter": "Ana",
}


@pytest.fixture
def repo():
    return FakeBugRepository()


@pytest.fixture
def service(repo):
    return BugService(repo, clock=TickingClock())


# ─── create ──────────────────────────────────────────────────────

async def test_create_applies_defaults(service):
    bug = await service.create_bug(SAFARI_BUG)
    assert bug["status"] == "open"
    assert bug["priority"] == "medium"
    assert bug["assignee"] is None
    assert isinstance(bug["id"], uuid.UUID)


async def test_create_keeps_supplied_priority_and_status(service):
    bug = await service.create_bug(
        {**SAFARI_BUG, "priority": "critical", "status": "in-progress"},
    )
    assert bug["priority"] == "critical"
    assert bug["status"] == "in-progress"


async def test_create_sets_equal_timestamps(service):
    bug = await service.create_bug(SAFARI_BUG)
    assert bug["created_at"] == bug["updated_at"]


async def test_create_trims_text_fields(service):
    bug = await service.create_bug({
        "title": "  Crash on save  ",
        "description": "  App crashes when saving a draft  ",
        "reporter": "  Bo  ",
        "assignee": "  Cy  ",
    })
    assert bug["title"] == "Crash on save"
    assert bug["description"] == "App crashes when saving a draft"
    assert bug["reporter"] == "Bo"
    assert bug["assignee"] == "Cy"


async def test_create_drops_unknown_and_immutable_system_fields(service):
    forced_id = str(uuid.uuid4())
    bug = await service.create_bug(
        {**SAFARI_BUG, "id": forced_id, "createdAt": "1999-01-01"},
    )
    assert str(bug["id"]) != forced_id
    assert bug["created_at"].year == 2026


async def test_create_invalid_input_lists_every_field(service, repo):
    with pytest.raises(ValidationFailedError) as exc:
        await service.create_bug(
            {"title": "Hi", "description": "short", "reporter": ""},
        )
    fields = [v.field for v in exc.value.violations]
    assert fields == ["title", "description", "reporter"]
    assert repo.calls == []


async def test_create_rejects_status_outside_enum(service, repo):
    with pytest.raises(ValidationFailedError) as exc:
        await service.create_bug({**SAFARI_BUG, "status": "closed"})
    assert [v.field for v in exc.value.violations] == ["status"]
    assert repo.calls == []


async def test_create_rejects_non_mapping_body(service, repo):
    with pytest.raises(ValidationFailedError):
        await service.create_bug(["not", "a", "mapping"])
    assert repo.calls == []


# ─── get ─────────────────────────────────────────────────────────

async def test_get_returns_record(service):
    created = await service.create_bug(SAFARI_BUG)
    fetched = await service.get_bug(str(created["id"]))
    assert fetched == created


async def test_get_missing_raises_not_found(service):
    with pytest.raises(NotFoundError):
        await service.get_bug(str(uuid.uuid4()))


async def test_get_malformed_id_raises_invalid_identifier(service):
    with pytest.raises(InvalidIdentifierError) as exc:
        await service.get_bug("not-a-valid-id")
    assert exc.value.resource_id == "not-a-valid-id"


# ─── list ────────────────────────────────────────────────────────

async def _seed(service):
    await service.create_bug({**SAFARI_BUG, "title": "First", "priority": "high"})
    await service.create_bug({**SAFARI_BUG, "title": "Second", "priority": "low"})
    third = await service.create_bug(
        {**SAFARI_BUG, "title": "Third", "priority": "high"},
    )
    await service.update_bug(str(third["id"]), {"status": "resolved"})


async def test_list_defaults_to_newest_first(service):
    await _seed(service)
    bugs = await service.list_bugs({})
    assert [b["title"] for b in bugs] == ["Third", "Second", "First"]


async def test_list_ascending(service):
    await _seed(service)
    bugs = await service.list_bugs({"order": "asc"})
    assert [b["title"] for b in bugs] == ["First", "Second", "Third"]


async def test_list_filters_on_both_fields(service):
    await _seed(service)
    bugs = await service.list_bugs({"status": "open", "priority": "high"})
    assert [b["title"] for b in bugs] == ["First"]


async def test_list_empty_filter_values_match_all(service):
    await _seed(service)
    bugs = await service.list_bugs({"status": "", "priority": None})
    assert len(bugs) == 3


async def test_list_unknown_sort_field_does_not_fail(service):
    await _seed(service)
    bugs = await service.list_bugs({"sortBy": "nonexistent"})
    assert len(bugs) == 3


# ─── update ──────────────────────────────────────────────────────

async def test_update_status_only_touches_status_and_updated_at(service):
    created = await service.create_bug(SAFARI_BUG)
    updated = await service.update_bug(str(created["id"]), {"status": "resolved"})
    assert updated["status"] == "resolved"
    assert updated["updated_at"] > created["updated_at"]
    for field in ("title", "description", "reporter", "priority", "assignee",
                  "created_at", "id"):
        assert updated[field] == created[field]


async def test_update_same_partial_twice_is_idempotent(service):
    created = await service.create_bug(SAFARI_BUG)
    bug_id = str(created["id"])
    patch = {"priority": "high", "assignee": "Bo"}
    first = await service.update_bug(bug_id, patch)
    second = await service.update_bug(bug_id, patch)
    assert second["updated_at"] > first["updated_at"]
    first.pop("updated_at")
    second.pop("updated_at")
    assert first == second


async def test_update_ignores_reporter(service):
    created = await service.create_bug(SAFARI_BUG)
    updated = await service.update_bug(
        str(created["id"]), {"reporter": "Mallory", "title": "New title"},
    )
    assert updated["reporter"] == "Ana"
    assert updated["title"] == "New title"


async def test_update_empty_string_leaves_field_unchanged(service):
    created = await service.create_bug({**SAFARI_BUG, "assignee": "Bo"})
    updated = await service.update_bug(str(created["id"]), {"assignee": ""})
    assert updated["assignee"] == "Bo"


async def test_update_invalid_input_never_reaches_storage(service, repo):
    created = await service.create_bug(SAFARI_BUG)
    repo.calls.clear()
    with pytest.raises(ValidationFailedError) as exc:
        await service.update_bug(str(created["id"]), {"status": "closed"})
    assert [v.field for v in exc.value.violations] == ["status"]
    assert repo.calls == []


async def test_update_missing_raises_not_found(service):
    with pytest.raises(NotFoundError):
        await service.update_bug(str(uuid.uuid4()), {"status": "resolved"})


async def test_update_malformed_id_raises_invalid_identifier(service):
    with pytest.raises(InvalidIdentifierError):
        await service.update_bug("42", {"status": "resolved"})


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_removes_record(service):
    created = await service.create_bug(SAFARI_BUG)
    await service.delete_bug(str(created["id"]))
    with pytest.raises(NotFoundError):
        await service.get_bug(str(created["id"]))


async def test_delete_missing_is_not_found_not_storage_failure(service):
    with pytest.raises(NotFoundError):
        await service.delete_bug(str(uuid.uuid4()))


async def test_delete_malformed_id_raises_invalid_identifier(service):
    with pytest.raises(InvalidIdentifierError):
        await service.delete_bug("zzz")


# ─── storage failures ────────────────────────────────────────────

async def test_storage_exception_becomes_storage_failure(service, repo):
    repo.fail_with = ConnectionError("connection refused")
    with pytest.raises(StorageFailureError) as exc:
        await service.list_bugs({})
    assert exc.value.message == "connection refused"
    assert exc.value.operation == "find"
    assert isinstance(exc.value.__cause__, ConnectionError)


async def test_storage_failure_on_create(service, repo):
    repo.fail_with = RuntimeError("disk full")
    with pytest.raises(StorageFailureError):
        await service.create_bug(SAFARI_BUG)


async def test_domain_errors_from_storage_pass_through(service, repo):
    repo.fail_with = StorageFailureError("pool exhausted", "execute")
    with pytest.raises(StorageFailureError) as exc:
        await service.get_bug(str(uuid.uuid4()))
    assert exc.value.operation == "execute"

"""DbComplaintRepository against SQLite: role scoping, ordering, submitter join, create and status update."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.exceptions import ProfileLookupError
from app.domain.exceptions import ComplaintNotFoundError
from app.domain.models.actor import UserRole
from app.domain.models.complaint import (
    UNKNOWN_SUBMITTER_NAME,
    ComplaintCategory,
    ComplaintDraft,
    ComplaintPriority,
    ComplaintStatus,
)
from app.infrastructure.database.complaint_repository_db import DbComplaintRepository
from app.infrastructure.database.profile_repository_db import DbProfileRepository


class CountingProfiles:
    """Wraps the DB profile repository and records every batch lookup."""

    def __init__(self, inner):
        self._inner = inner
        self.calls = []

    async def get_by_user_id(self, user_id):
        return await self._inner.get_by_user_id(user_id)

    async def get_many(self, user_ids):
        ids = list(user_ids)
        self.calls.append(ids)
        return await self._inner.get_many(ids)


@pytest.fixture
def profiles(db):
    return CountingProfiles(DbProfileRepository(db))


@pytest.fixture
def repository(db, profiles):
    return DbComplaintRepository(db, profiles=profiles)


def _draft(title="Broken projector", priority=ComplaintPriority.HIGH):
    return ComplaintDraft(
        title=title,
        description="The projector in room 101 does not turn on at all.",
        category=ComplaintCategory.FACILITY,
        priority=priority,
    )


@pytest.mark.asyncio
async def test_student_sees_only_own_complaints(repository, add_profile, add_complaint, actor_factory):
    """u1 owns two rows, u2 owns one: u1 gets exactly its two, u2 gets its one."""
    await add_profile("u1", "Asha")
    await add_profile("u2", "Bilal")
    await add_complaint("u1", title="Wifi down", minutes=1)
    await add_complaint("u1", title="Cold food", minutes=2)
    await add_complaint("u2", title="Late bus", minutes=3)

    mine = await repository.list(actor_factory("u1"))
    assert [c.title for c in mine] == ["Cold food", "Wifi down"]
    assert all(c.submitted_by.id == "u1" for c in mine)

    theirs = await repository.list(actor_factory("u2", name="Bilal"))
    assert [c.title for c in theirs] == ["Late bus"]


@pytest.mark.asyncio
async def test_admin_sees_all_newest_first(repository, add_profile, add_complaint, admin):
    await add_profile("u1", "Asha")
    await add_profile("u2", "Bilal")
    await add_complaint("u1", title="Oldest", minutes=1)
    await add_complaint("u2", title="Newest", minutes=30)
    await add_complaint("u1", title="Middle", minutes=10)

    complaints = await repository.list(admin)
    assert [c.title for c in complaints] == ["Newest", "Middle", "Oldest"]
    assert [c.submitted_by.name for c in complaints] == ["Bilal", "Asha", "Asha"]


@pytest.mark.asyncio
async def test_list_resolves_owners_in_one_lookup(repository, profiles, add_profile, add_complaint, admin):
    """Three rows from two owners: one batch lookup with the de-duplicated owner ids."""
    await add_profile("u1", "Asha")
    await add_profile("u2", "Bilal")
    await add_complaint("u1", minutes=1)
    await add_complaint("u1", minutes=2)
    await add_complaint("u2", minutes=3)

    await repository.list(admin)
    assert len(profiles.calls) == 1
    assert sorted(profiles.calls[0]) == ["u1", "u2"]


@pytest.mark.asyncio
async def test_empty_list_skips_profile_lookup(repository, profiles, student):
    assert await repository.list(student) == []
    assert profiles.calls == []


@pytest.mark.asyncio
async def test_missing_profile_falls_back_to_unknown_user(repository, add_complaint, admin):
    await add_complaint("ghost", title="Orphaned row")

    complaints = await repository.list(admin)
    assert len(complaints) == 1
    submitter = complaints[0].submitted_by
    assert submitter.id == "ghost"
    assert submitter.name == UNKNOWN_SUBMITTER_NAME
    assert submitter.email == ""


@pytest.mark.asyncio
async def test_profile_lookup_failure_still_returns_rows(db, add_complaint, add_profile, admin):
    """A failing profile store degrades every submitter to the fallback instead of failing the list."""
    await add_profile("u1", "Asha")
    await add_complaint("u1")
    failing = AsyncMock()
    failing.get_many = AsyncMock(side_effect=ProfileLookupError("profiles unavailable"))
    repository = DbComplaintRepository(db, profiles=failing)

    complaints = await repository.list(admin)
    assert len(complaints) == 1
    assert complaints[0].submitted_by.name == UNKNOWN_SUBMITTER_NAME


@pytest.mark.asyncio
async def test_create_inserts_pending_complaint(repository, add_profile, student):
    await add_profile("u1", "Asha", department="CS", student_id="S-100")

    created = await repository.create(student, _draft())
    assert created.id
    assert created.status == ComplaintStatus.PENDING
    assert created.resolved_at is None
    assert created.admin_reply is None
    assert created.submitted_by.id == student.identifier

    listed = await repository.list(student)
    assert [c.id for c in listed] == [created.id]
    assert listed[0].priority == ComplaintPriority.HIGH
    assert listed[0].category == ComplaintCategory.FACILITY
    assert listed[0].created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_create_assigns_fresh_ids(repository, student):
    first = await repository.create(student, _draft(title="First one"))
    second = await repository.create(student, _draft(title="Second one"))
    assert first.id != second.id


@pytest.mark.asyncio
async def test_update_to_resolved_sets_resolved_at(repository, add_profile, add_complaint, admin):
    await add_profile("u1", "Asha")
    complaint_id = await add_complaint("u1")

    await repository.update_status(complaint_id, ComplaintStatus.RESOLVED, "Replaced the bulb")

    [complaint] = await repository.list(admin)
    assert complaint.status == ComplaintStatus.RESOLVED
    assert complaint.resolved_at is not None
    assert complaint.admin_reply == "Replaced the bulb"
    assert complaint.updated_at >= complaint.created_at


@pytest.mark.asyncio
async def test_leaving_resolved_clears_resolved_at(repository, add_complaint, admin):
    complaint_id = await add_complaint("u1")
    await repository.update_status(complaint_id, ComplaintStatus.RESOLVED)
    await repository.update_status(complaint_id, ComplaintStatus.PENDING)

    [complaint] = await repository.list(admin)
    assert complaint.status == ComplaintStatus.PENDING
    assert complaint.resolved_at is None


@pytest.mark.asyncio
async def test_update_without_reply_keeps_existing_reply(repository, add_complaint, admin):
    complaint_id = await add_complaint("u1")
    await repository.update_status(complaint_id, ComplaintStatus.IN_PROGRESS, "Looking into it")
    await repository.update_status(complaint_id, ComplaintStatus.REJECTED)

    [complaint] = await repository.list(admin)
    assert complaint.status == ComplaintStatus.REJECTED
    assert complaint.admin_reply == "Looking into it"


@pytest.mark.asyncio
async def test_update_unknown_id_raises_and_changes_nothing(repository, add_complaint, admin):
    await add_complaint("u1")
    before = await repository.list(admin)

    with pytest.raises(ComplaintNotFoundError):
        await repository.update_status("does-not-exist", ComplaintStatus.RESOLVED)

    after = await repository.list(admin)
    assert [(c.id, c.status) for c in after] == [(c.id, c.status) for c in before]


@pytest.mark.asyncio
async def test_broken_projector_scenario(repository, add_profile, actor_factory, admin):
    """Student submits, admin resolves, student sees the resolution."""
    await add_profile("u1", "Asha")
    await add_profile("a1", "Admin", role="admin")
    student = actor_factory("u1")

    created = await repository.create(student, _draft(title="Broken projector"))
    assert created.status == ComplaintStatus.PENDING

    admin_view = await repository.list(admin)
    assert [c.id for c in admin_view] == [created.id]
    assert admin_view[0].submitted_by.name == "Asha"

    await repository.update_status(created.id, ComplaintStatus.RESOLVED, "Fixed")

    [seen] = await repository.list(student)
    assert seen.status == ComplaintStatus.RESOLVED
    assert seen.resolved_at is not None
    assert seen.admin_reply == "Fixed"
    assert admin.role == UserRole.ADMIN


@pytest.mark.asyncio
async def test_list_scope_follows_view_all_permission(db, profiles, add_complaint, student):
    """Scoping asks RBAC for view_all instead of checking the role directly."""
    await add_complaint("u1", title="Mine", minutes=1)
    await add_complaint("u2", title="Someone else's", minutes=2)
    rbac = MagicMock()
    rbac.has_permission = MagicMock(return_value=True)
    repository = DbComplaintRepository(db, profiles=profiles, rbac=rbac)

    complaints = await repository.list(student)
    assert [c.title for c in complaints] == ["Someone else's", "Mine"]
    rbac.has_permission.assert_called_once_with(UserRole.STUDENT, "view_all")

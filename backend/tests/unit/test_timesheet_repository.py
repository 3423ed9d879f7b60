"""Unit tests for the timesheet repository."""

from datetime import date

import pytest
from pydantic import ValidationError

from boatrecords.application.schemas import TimesheetEntryCreate, TimesheetEntryUpdate
from boatrecords.domain.entities import AuditAction, AuditContext, TimesheetEntry
from boatrecords.domain.exceptions import EntityNotFoundError
from boatrecords.infrastructure.dependencies import Repositories, build_repositories
from boatrecords.infrastructure.persistence import InMemoryMedium, KeyValueStoreAdapter

CONTEXT = AuditContext(user_id="u1", user_name="Anna")
OTHER = AuditContext(user_id="u2", user_name="Bram")


def _entry(day: int, hours: float = 2, project_id: str = "p1", **kwargs) -> TimesheetEntryCreate:
    return TimesheetEntryCreate(
        date=date(2026, 5, day),
        hours=hours,
        project_id=project_id,
        billable=kwargs.pop("billable", False),
        **kwargs,
    )


@pytest.fixture
def repos() -> Repositories:
    return build_repositories(KeyValueStoreAdapter(InMemoryMedium()))


@pytest.mark.asyncio
async def test_create_drops_billing_rate_when_not_billable(repos: Repositories):
    entry = await repos.timesheets.create(_entry(4, billable=False, billing_rate=50), CONTEXT)

    stored = await repos.timesheets.get_by_id(entry.id)
    assert stored.billable is False
    assert stored.billing_rate is None
    assert stored.user_id == "u1"
    assert stored.user_name == "Anna"


@pytest.mark.asyncio
async def test_create_keeps_billing_rate_when_billable(repos: Repositories):
    entry = await repos.timesheets.create(_entry(4, billable=True, billing_rate=75), CONTEXT)
    assert entry.billing_rate == 75


def test_hours_must_be_quarter_increments_within_a_day():
    with pytest.raises(ValidationError):
        _entry(4, hours=1.1)
    with pytest.raises(ValidationError):
        _entry(4, hours=0)
    with pytest.raises(ValidationError):
        _entry(4, hours=24.25)
    assert _entry(4, hours=7.75).hours == 7.75


@pytest.mark.asyncio
async def test_update_to_not_billable_clears_rate(repos: Repositories):
    entry = await repos.timesheets.create(_entry(4, billable=True, billing_rate=75), CONTEXT)

    updated = await repos.timesheets.update(
        entry.id, TimesheetEntryUpdate(billable=False), OTHER
    )

    assert updated.billing_rate is None
    assert updated.updated_by == "u2"
    assert updated.version == entry.version + 1


@pytest.mark.asyncio
async def test_update_only_touches_provided_fields(repos: Repositories):
    entry = await repos.timesheets.create(_entry(4, note="Wiring"), CONTEXT)

    updated = await repos.timesheets.update(entry.id, TimesheetEntryUpdate(hours=3.5), CONTEXT)

    assert updated.hours == 3.5
    assert updated.note == "Wiring"
    assert updated.date == date(2026, 5, 4)


@pytest.mark.asyncio
async def test_update_missing_entry_raises(repos: Repositories):
    with pytest.raises(EntityNotFoundError):
        await repos.timesheets.update("missing", TimesheetEntryUpdate(hours=1), CONTEXT)


@pytest.mark.asyncio
async def test_lookups_are_ordered_by_date(repos: Repositories):
    for day in (3, 9, 6):
        await repos.timesheets.create(_entry(day), CONTEXT)
    await repos.timesheets.create(_entry(7, project_id="p2"), OTHER)

    by_user = await repos.timesheets.get_by_user("u1")
    assert [e.date.day for e in by_user] == [9, 6, 3]

    by_project = await repos.timesheets.get_by_project("p1")
    assert [e.date.day for e in by_project] == [9, 6, 3]

    in_range = await repos.timesheets.get_by_date_range(date(2026, 5, 5), date(2026, 5, 9))
    assert [e.date.day for e in in_range] == [6, 7, 9]

    mine_in_range = await repos.timesheets.get_by_date_range(
        date(2026, 5, 5), date(2026, 5, 9), user_id="u2"
    )
    assert [e.date.day for e in mine_in_range] == [7]


@pytest.mark.asyncio
async def test_total_hours(repos: Repositories):
    await repos.timesheets.create(_entry(3, hours=2.5), CONTEXT)
    await repos.timesheets.create(_entry(4, hours=4, billable=True, billing_rate=60), CONTEXT)

    assert await repos.timesheets.get_total_hours("p1") == 6.5
    assert await repos.timesheets.get_total_hours("p1", billable_only=True) == 4


@pytest.mark.asyncio
async def test_delete_returns_false_for_unknown_id(repos: Repositories):
    entry = await repos.timesheets.create(_entry(3), CONTEXT)

    assert await repos.timesheets.delete(entry.id, CONTEXT) is True
    assert await repos.timesheets.delete(entry.id, CONTEXT) is False
    assert await repos.timesheets.get_by_id(entry.id) is None


@pytest.mark.asyncio
async def test_delete_all_audits_each_removal(repos: Repositories):
    for day in (3, 4):
        await repos.timesheets.create(_entry(day), CONTEXT)

    assert await repos.timesheets.delete_all(CONTEXT) == 2
    assert await repos.timesheets.count() == 0
    deletions = [
        e for e in await repos.audit.get_all() if e.action == AuditAction.DELETE
    ]
    assert len(deletions) == 2


@pytest.mark.asyncio
async def test_import_skips_older_incoming_version(repos: Repositories):
    entry = await repos.timesheets.create(_entry(3, hours=1), CONTEXT)
    await repos.timesheets.update(entry.id, TimesheetEntryUpdate(hours=2), CONTEXT)
    local = await repos.timesheets.update(entry.id, TimesheetEntryUpdate(hours=3), CONTEXT)
    assert local.version == 3

    incoming = TimesheetEntry(**{**vars(local), "version": 2, "hours": 8})
    imported = await repos.timesheets.import_entities([incoming], CONTEXT)

    assert imported == 0
    stored = await repos.timesheets.get_by_id(entry.id)
    assert stored.hours == 3
    assert stored.version == 3


@pytest.mark.asyncio
async def test_import_accepts_new_and_newer_records(repos: Repositories):
    local = await repos.timesheets.create(_entry(3, hours=1), CONTEXT)
    newer = TimesheetEntry(**{**vars(local), "version": local.version + 1, "hours": 6})
    fresh = TimesheetEntry(
        user_id="u9",
        user_name="Imported",
        date=date(2026, 5, 1),
        hours=1.5,
        project_id="p1",
        created_by="u9",
        version=4,
    )

    imported = await repos.timesheets.import_entities([newer, fresh], CONTEXT)

    assert imported == 2
    assert (await repos.timesheets.get_by_id(local.id)).hours == 6
    assert (await repos.timesheets.get_by_id(fresh.id)).user_name == "Imported"
    imports = [e for e in await repos.audit.get_all() if e.action == AuditAction.IMPORT]
    assert imports[0].metadata == {"imported": 2, "skipped": 0}


@pytest.mark.asyncio
async def test_import_keeps_highest_version_of_a_repeated_id(repos: Repositories):
    base = TimesheetEntry(
        user_id="u9",
        user_name="Imported",
        date=date(2026, 5, 1),
        hours=1,
        project_id="p1",
        created_by="u9",
        version=3,
    )
    older = TimesheetEntry(**{**vars(base), "version": 2, "hours": 5})

    imported = await repos.timesheets.import_entities([base, older], CONTEXT)

    assert imported == 1
    stored = await repos.timesheets.get_by_id(base.id)
    assert stored.version == 3
    assert stored.hours == 1
    imports = [e for e in await repos.audit.get_all() if e.action == AuditAction.IMPORT]
    assert imports[0].metadata == {"imported": 1, "skipped": 1}

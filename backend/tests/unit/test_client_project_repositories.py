"""Unit tests for the client and project repositories."""

import pytest

from boatrecords.application.schemas import (
    ClientCreate,
    ClientUpdate,
    ProjectCreate,
    ProjectUpdate,
)
from boatrecords.domain.entities import (
    AuditAction,
    AuditContext,
    ClientStatus,
    ClientType,
    ProjectStatus,
    ProjectType,
    utc_now,
)
from boatrecords.domain.exceptions import (
    ConflictError,
    DomainRuleViolationError,
    EntityNotFoundError,
)
from boatrecords.application.namespaces import PROJECTS
from boatrecords.infrastructure.dependencies import Repositories, build_repositories
from boatrecords.infrastructure.persistence import InMemoryMedium, KeyValueStoreAdapter

CONTEXT = AuditContext(user_id="u1", user_name="Anna")
OTHER = AuditContext(user_id="u2", user_name="Bram")


@pytest.fixture
def adapter() -> KeyValueStoreAdapter:
    return KeyValueStoreAdapter(InMemoryMedium())


@pytest.fixture
def repos(adapter: KeyValueStoreAdapter) -> Repositories:
    return build_repositories(adapter)


def _client(name: str, **kwargs) -> ClientCreate:
    return ClientCreate(name=name, type=ClientType.COMPANY, country="NL", **kwargs)


# ── Clients ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_client_numbers_are_sequential_per_year(repos: Repositories):
    first = await repos.clients.create(_client("Van Dijk Marine"), CONTEXT)
    second = await repos.clients.create(_client("Zeilmakerij Noord"), CONTEXT)

    year = utc_now().year
    assert first.client_number == f"CLI-{year}-0001"
    assert second.client_number == f"CLI-{year}-0002"
    assert (await repos.clients.get_by_number(second.client_number)).id == second.id
    assert await repos.clients.get_by_number("CLI-1999-0001") is None


@pytest.mark.asyncio
async def test_get_active_excludes_archived_and_sorts_by_name(repos: Repositories):
    zeta = await repos.clients.create(_client("Zeta"), CONTEXT)
    await repos.clients.create(_client("Alpha"), CONTEXT)
    await repos.clients.create(_client("Mimi"), CONTEXT)
    await repos.clients.create(_client("Prospect BV", status=ClientStatus.PROSPECT), CONTEXT)

    await repos.clients.archive(zeta.id, "Moved abroad", CONTEXT)

    assert [c.name for c in await repos.clients.get_active()] == ["Alpha", "Mimi"]
    archived = await repos.clients.get_by_id(zeta.id)
    assert archived.is_archived
    assert archived.status == ClientStatus.INACTIVE
    assert archived.archive_reason == "Moved abroad"


@pytest.mark.asyncio
async def test_client_search_matches_name_email_and_number(repos: Repositories):
    client = await repos.clients.create(
        _client("Van Dijk Marine", email="info@vandijk.nl"), CONTEXT
    )
    await repos.clients.create(_client("Other"), CONTEXT)

    assert [c.id for c in await repos.clients.search("dijk")] == [client.id]
    assert [c.id for c in await repos.clients.search("INFO@")] == [client.id]
    assert [c.id for c in await repos.clients.search(client.client_number.lower())] == [client.id]


@pytest.mark.asyncio
async def test_client_update_and_missing_client(repos: Repositories):
    client = await repos.clients.create(_client("Alpha", city="Lemmer"), CONTEXT)

    updated = await repos.clients.update(client.id, ClientUpdate(phone="+31 6 1234"), CONTEXT)
    assert updated.phone == "+31 6 1234"
    assert updated.city == "Lemmer"

    with pytest.raises(EntityNotFoundError):
        await repos.clients.update("missing", ClientUpdate(phone="x"), CONTEXT)
    with pytest.raises(EntityNotFoundError):
        await repos.clients.archive("missing", "n/a", CONTEXT)


# ── Projects ─────────────────────────────────────────────────────────


async def _project(repos: Repositories, title: str = "Eendracht refit", **kwargs):
    client = await repos.clients.create(_client("Owner"), CONTEXT)
    return await repos.projects.create(
        ProjectCreate(title=title, type=ProjectType.REFIT, client_id=client.id, **kwargs),
        CONTEXT,
    )


@pytest.mark.asyncio
async def test_create_project_starts_with_empty_configuration(repos: Repositories):
    project = await _project(repos, boat_model_version_id="bm-v1")

    assert project.project_number == f"PRJ-{utc_now().year}-0001"
    assert project.status == ProjectStatus.DRAFT
    assert project.created_by == "u1"
    assert project.configuration.items == []
    assert project.configuration.boat_model_version_id == "bm-v1"
    assert project.configuration.is_frozen is False


@pytest.mark.asyncio
async def test_update_status_logs_transition(repos: Repositories):
    project = await _project(repos)

    updated = await repos.projects.update_status(
        project.id, ProjectStatus.QUOTED, CONTEXT, reason="Quote sent"
    )

    assert updated.status == ProjectStatus.QUOTED
    assert updated.version == project.version + 1
    history = await repos.audit.get_history("Project", project.id)
    assert history[0].action == AuditAction.STATUS_TRANSITION
    assert history[0].metadata == {
        "from_status": "DRAFT",
        "to_status": "QUOTED",
        "reason": "Quote sent",
    }


@pytest.mark.asyncio
async def test_same_status_is_not_written(repos: Repositories):
    project = await _project(repos)

    unchanged = await repos.projects.update_status(project.id, ProjectStatus.DRAFT, CONTEXT)

    assert unchanged.version == project.version
    assert len(await repos.audit.get_history("Project", project.id)) == 1


@pytest.mark.asyncio
async def test_status_lookups_exclude_archived_and_closed(repos: Repositories):
    open_project = await _project(repos, title="Open")
    closed = await _project(repos, title="Closed")
    archived = await _project(repos, title="Archived")
    await repos.projects.update_status(closed.id, ProjectStatus.CLOSED, CONTEXT)
    await repos.projects.archive(archived.id, "Cancelled", CONTEXT)

    assert [p.id for p in await repos.projects.get_active()] == [open_project.id]
    assert [p.id for p in await repos.projects.get_by_status(ProjectStatus.CLOSED)] == [closed.id]
    assert [p.id for p in await repos.projects.get_by_client(open_project.client_id)] == [
        open_project.id
    ]


@pytest.mark.asyncio
async def test_project_search_and_header_update(repos: Repositories):
    project = await _project(repos, title="Eendracht refit")

    updated = await repos.projects.update(project.id, ProjectUpdate(is_internal=True), CONTEXT)

    assert updated.is_internal is True
    assert updated.title == "Eendracht refit"
    assert [p.id for p in await repos.projects.search("EENDRACHT")] == [project.id]
    assert (await repos.projects.get_by_number(project.project_number)).id == project.id


@pytest.mark.asyncio
async def test_frozen_configuration_rejects_edits(repos: Repositories):
    project = await _project(repos)

    frozen = await repos.projects.freeze_configuration(project.id, CONTEXT)
    assert frozen.configuration.is_frozen is True
    assert frozen.configuration.frozen_by == "u1"

    configuration = frozen.configuration
    configuration.discount_percent = 10
    with pytest.raises(DomainRuleViolationError):
        await repos.projects.update_configuration(project.id, configuration, CONTEXT)
    with pytest.raises(DomainRuleViolationError):
        await repos.projects.freeze_configuration(project.id, CONTEXT)

    actions = [e.action for e in await repos.audit.get_history("Project", project.id)]
    assert actions == [AuditAction.FREEZE, AuditAction.CREATE]


@pytest.mark.asyncio
async def test_pinned_boat_model_version_cannot_change(repos: Repositories):
    project = await _project(repos, boat_model_version_id="bm-v1")

    configuration = project.configuration
    configuration.boat_model_version_id = "bm-v2"
    with pytest.raises(DomainRuleViolationError):
        await repos.projects.update_configuration(project.id, configuration, CONTEXT)

    configuration.boat_model_version_id = "bm-v1"
    configuration.total_excl_vat = 1000.0
    updated = await repos.projects.update_configuration(project.id, configuration, CONTEXT)
    assert updated.configuration.total_excl_vat == 1000.0


@pytest.mark.asyncio
async def test_stale_project_write_conflicts(
    repos: Repositories, adapter: KeyValueStoreAdapter
):
    project = await _project(repos)
    stale = await repos.projects.get_by_id(project.id)

    await repos.projects.update(project.id, ProjectUpdate(title="Renamed"), CONTEXT)

    stale.title = "Lost update"
    with pytest.raises(ConflictError):
        await adapter.save(PROJECTS, stale)


@pytest.mark.asyncio
async def test_import_never_overwrites_frozen_projects(repos: Repositories):
    project = await _project(repos)
    incoming = await repos.projects.get_by_id(project.id)
    await repos.projects.freeze_configuration(project.id, CONTEXT)

    incoming.title = "From backup"
    incoming.version = 99
    imported = await repos.projects.import_entities([incoming], CONTEXT)

    assert imported == 0
    assert (await repos.projects.get_by_id(project.id)).title == "Eendracht refit"


@pytest.mark.asyncio
async def test_update_configuration_does_not_alias_the_callers_object(
    repos: Repositories,
):
    project = await _project(repos)
    configuration = project.configuration
    configuration.total_excl_vat = 250.0

    updated = await repos.projects.update_configuration(project.id, configuration, OTHER)

    assert updated.configuration is not configuration
    assert updated.configuration.last_modified_by == "u2"
    assert configuration.last_modified_by == "u1"
    assert updated.configuration.total_excl_vat == 250.0

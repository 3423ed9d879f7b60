"""Process wiring: builds the storage medium, the adapter and the repositories.

One ``Storage`` is opened per process and its single adapter is handed to
every repository through ``build_repositories``.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine

from boatrecords.config import Settings, get_settings
from boatrecords.application.interfaces import PersistenceAdapter
from boatrecords.application.repositories import (
    ArticleRepository,
    ArticleVersionRepository,
    AuditRepository,
    BaseRepository,
    CategoryRepository,
    ClientRepository,
    KitRepository,
    KitVersionRepository,
    ProjectRepository,
    StaffRepository,
    SubcategoryRepository,
    TimesheetRepository,
)
from boatrecords.application.services import (
    AuditService,
    DataExportService,
    LibrarySeedService,
)
from boatrecords.domain.entities import utc_now
from boatrecords.infrastructure.database import (
    SQLAlchemyMedium,
    create_engine,
    create_schema,
    create_session_factory,
)
from boatrecords.infrastructure.persistence import (
    InMemoryMedium,
    KeyValueMedium,
    KeyValueStoreAdapter,
    UnavailableMedium,
)

logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[2]

STORAGE_BACKENDS = ("sql", "memory", "none")


@dataclass
class Storage:
    """The process-wide medium and adapter, plus the engine when SQL-backed."""

    medium: KeyValueMedium
    adapter: KeyValueStoreAdapter
    engine: AsyncEngine | None = None

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            logger.debug("Database engine disposed")


@dataclass
class Repositories:
    audit: AuditService
    audit_log: AuditRepository
    categories: CategoryRepository
    subcategories: SubcategoryRepository
    articles: ArticleRepository
    article_versions: ArticleVersionRepository
    kits: KitRepository
    kit_versions: KitVersionRepository
    staff: StaffRepository
    timesheets: TimesheetRepository
    clients: ClientRepository
    projects: ProjectRepository

    def by_namespace(self) -> dict[str, BaseRepository]:
        """Entity repositories keyed by the namespace they own."""
        repositories: list[BaseRepository] = [
            self.categories,
            self.subcategories,
            self.articles,
            self.article_versions,
            self.kits,
            self.kit_versions,
            self.staff,
            self.timesheets,
            self.clients,
            self.projects,
        ]
        return {repo.namespace.name: repo for repo in repositories}


async def create_medium(settings: Settings) -> tuple[KeyValueMedium, AsyncEngine | None]:
    backend = settings.storage_backend.lower()
    if backend == "memory":
        return InMemoryMedium(), None
    if backend == "none":
        return UnavailableMedium(), None
    if backend == "sql":
        engine = create_engine(settings.database_url)
        await create_schema(engine)
        return SQLAlchemyMedium(create_session_factory(engine)), engine
    raise ValueError(
        f"Unknown storage_backend '{settings.storage_backend}', "
        f"expected one of {', '.join(STORAGE_BACKENDS)}"
    )


async def open_storage(settings: Settings | None = None) -> Storage:
    """Build the single medium + adapter pair for this process."""
    settings = settings or get_settings()
    medium, engine = await create_medium(settings)
    adapter = KeyValueStoreAdapter(
        medium,
        key_prefix=settings.storage_key_prefix,
        strict_versioning=settings.strict_versioning,
    )
    logger.info(
        "Storage ready (backend=%s, strict_versioning=%s)",
        settings.storage_backend,
        settings.strict_versioning,
    )
    return Storage(medium=medium, adapter=adapter, engine=engine)


def build_repositories(
    adapter: PersistenceAdapter,
    *,
    audit_recent_limit: int = 50,
    clock: Callable[[], datetime] = utc_now,
) -> Repositories:
    audit_log = AuditRepository(adapter, clock=clock)
    audit = AuditService(audit_log, recent_limit=audit_recent_limit)
    return Repositories(
        audit=audit,
        audit_log=audit_log,
        categories=CategoryRepository(adapter, audit),
        subcategories=SubcategoryRepository(adapter, audit),
        articles=ArticleRepository(adapter, audit),
        article_versions=ArticleVersionRepository(adapter, audit),
        kits=KitRepository(adapter, audit),
        kit_versions=KitVersionRepository(adapter, audit),
        staff=StaffRepository(adapter, audit),
        timesheets=TimesheetRepository(adapter, audit),
        clients=ClientRepository(adapter, audit),
        projects=ProjectRepository(adapter, audit),
    )


def get_library_seed_service(repositories: Repositories) -> LibrarySeedService:
    return LibrarySeedService(
        categories=repositories.categories,
        subcategories=repositories.subcategories,
        articles=repositories.articles,
        article_versions=repositories.article_versions,
    )


def get_data_export_service(
    adapter: PersistenceAdapter,
    repositories: Repositories,
    settings: Settings | None = None,
) -> DataExportService:
    settings = settings or get_settings()
    return DataExportService(
        adapter,
        repositories.by_namespace(),
        repositories.audit_log,
        app_version=settings.app_version,
    )


def resolve_seed_file(settings: Settings | None = None) -> Path:
    """Seed file path; relative paths are taken from the backend directory."""
    settings = settings or get_settings()
    path = Path(settings.seed_library_file)
    return path if path.is_absolute() else _BACKEND_DIR / path

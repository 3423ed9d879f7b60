from .audit_repository import AuditRepository
from .base import BaseRepository
from .client_repository import ClientRepository
from .library_repository import (
    ArticleRepository,
    CategoryRepository,
    KitRepository,
    SubcategoryRepository,
)
from .library_version_repository import ArticleVersionRepository, KitVersionRepository
from .project_repository import ProjectRepository
from .staff_repository import StaffRepository
from .timesheet_repository import TimesheetRepository

__all__ = [
    "AuditRepository",
    "BaseRepository",
    "ClientRepository",
    "ArticleRepository",
    "CategoryRepository",
    "KitRepository",
    "SubcategoryRepository",
    "ArticleVersionRepository",
    "KitVersionRepository",
    "ProjectRepository",
    "StaffRepository",
    "TimesheetRepository",
]

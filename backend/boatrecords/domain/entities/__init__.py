from .base import Entity, Archivable, generate_number, new_id, utc_now
from .audit import AuditAction, AuditContext, AuditEntry
from .client import Client, ClientStatus, ClientType
from .library import (
    ArticleTag,
    ArticleVersion,
    CostRollupMode,
    KitComponent,
    KitVersion,
    LibraryArticle,
    LibraryCategory,
    LibraryKit,
    LibrarySubcategory,
    TemplateVersion,
    VersionStatus,
)
from .project import (
    ConfigurationItem,
    ConfigurationItemType,
    Project,
    ProjectConfiguration,
    ProjectStatus,
    ProjectType,
    PropulsionType,
)
from .staff import StaffMember
from .timesheet import TimesheetEntry, is_valid_hours

__all__ = [
    "Entity",
    "Archivable",
    "generate_number",
    "new_id",
    "utc_now",
    "AuditAction",
    "AuditContext",
    "AuditEntry",
    "Client",
    "ClientStatus",
    "ClientType",
    "ArticleTag",
    "ArticleVersion",
    "CostRollupMode",
    "KitComponent",
    "KitVersion",
    "LibraryArticle",
    "LibraryCategory",
    "LibraryKit",
    "LibrarySubcategory",
    "TemplateVersion",
    "VersionStatus",
    "ConfigurationItem",
    "ConfigurationItemType",
    "Project",
    "ProjectConfiguration",
    "ProjectStatus",
    "ProjectType",
    "PropulsionType",
    "StaffMember",
    "TimesheetEntry",
    "is_valid_hours",
]

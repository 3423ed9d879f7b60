from .audit import AuditEntryCreate
from .client import ClientCreate, ClientUpdate
from .library import (
    ArticleCreate,
    ArticleUpdate,
    ArticleVersionCreate,
    ArticleVersionUpdate,
    CategoryCreate,
    CategoryUpdate,
    KitCreate,
    KitUpdate,
    KitVersionCreate,
    KitVersionUpdate,
    SubcategoryCreate,
    SubcategoryUpdate,
)
from .project import ProjectCreate, ProjectUpdate
from .staff import StaffCreate, StaffUpdate
from .timesheet import TimesheetEntryCreate, TimesheetEntryUpdate

__all__ = [
    "AuditEntryCreate",
    "ClientCreate",
    "ClientUpdate",
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleVersionCreate",
    "ArticleVersionUpdate",
    "CategoryCreate",
    "CategoryUpdate",
    "KitCreate",
    "KitUpdate",
    "KitVersionCreate",
    "KitVersionUpdate",
    "SubcategoryCreate",
    "SubcategoryUpdate",
    "ProjectCreate",
    "ProjectUpdate",
    "StaffCreate",
    "StaffUpdate",
    "TimesheetEntryCreate",
    "TimesheetEntryUpdate",
]

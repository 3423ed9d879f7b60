"""Namespaces used by the repositories, one per stored entity type."""

from boatrecords.application.interfaces import Namespace
from boatrecords.domain.entities import (
    ArticleVersion,
    AuditEntry,
    Client,
    KitVersion,
    LibraryArticle,
    LibraryCategory,
    LibraryKit,
    LibrarySubcategory,
    Project,
    StaffMember,
    TimesheetEntry,
)

CATEGORIES = Namespace("categories", LibraryCategory)
SUBCATEGORIES = Namespace("subcategories", LibrarySubcategory)
ARTICLES = Namespace("articles", LibraryArticle)
ARTICLE_VERSIONS = Namespace("article-versions", ArticleVersion)
KITS = Namespace("kits", LibraryKit)
KIT_VERSIONS = Namespace("kit-versions", KitVersion)
STAFF = Namespace("staff", StaffMember)
TIMESHEETS = Namespace("timesheets", TimesheetEntry)
AUDIT = Namespace("audit", AuditEntry)
CLIENTS = Namespace("clients", Client)
PROJECTS = Namespace("projects", Project)

ALL_NAMESPACES: tuple[Namespace, ...] = (
    CATEGORIES,
    SUBCATEGORIES,
    ARTICLES,
    ARTICLE_VERSIONS,
    KITS,
    KIT_VERSIONS,
    STAFF,
    TIMESHEETS,
    AUDIT,
    CLIENTS,
    PROJECTS,
)

BY_NAME: dict[str, Namespace] = {ns.name: ns for ns in ALL_NAMESPACES}

"""Library entities: a stable taxonomy plus versioned article and kit templates.

Categories → Subcategories → Articles/Kits. Articles and kits are mutable
templates; each owns a series of version records that become immutable once
APPROVED, so configurations can pin a version id and stay reproducible.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from boatrecords.domain.entities.base import Entity


class VersionStatus(str, Enum):
    DRAFT = "DRAFT"
    APPROVED = "APPROVED"


class ArticleTag(str, Enum):
    CE_CRITICAL = "CE_CRITICAL"
    SAFETY_CRITICAL = "SAFETY_CRITICAL"
    OPTIONAL = "OPTIONAL"
    STANDARD = "STANDARD"


class CostRollupMode(str, Enum):
    SUM_COMPONENTS = "SUM_COMPONENTS"
    MANUAL = "MANUAL"


# ── Taxonomy (not versioned) ─────────────────────────────────────────


@dataclass(kw_only=True)
class LibraryCategory(Entity):
    name: str
    sort_order: int = 0


@dataclass(kw_only=True)
class LibrarySubcategory(Entity):
    category_id: str
    name: str
    sort_order: int = 0


# ── Templates ────────────────────────────────────────────────────────


@dataclass(kw_only=True)
class LibraryArticle(Entity):
    code: str  # unique, e.g. PROP-SHAFT-040
    name: str
    subcategory_id: str
    unit: str
    supplier_id: str | None = None
    tags: list[ArticleTag] = field(default_factory=list)
    current_version_id: str | None = None


@dataclass(kw_only=True)
class LibraryKit(Entity):
    code: str  # unique, e.g. KIT-PROP-SHAFTLINE-040
    name: str
    subcategory_id: str
    current_version_id: str | None = None


# ── Versions ─────────────────────────────────────────────────────────


@dataclass(kw_only=True)
class TemplateVersion(Entity):
    """Fields shared by article and kit versions."""

    version_number: int
    status: VersionStatus = VersionStatus.DRAFT
    sell_price: float
    approved_at: datetime | None = None
    approved_by: str | None = None

    @property
    def is_approved(self) -> bool:
        return self.status == VersionStatus.APPROVED


@dataclass(kw_only=True)
class ArticleVersion(TemplateVersion):
    article_id: str
    cost_price: float | None = None
    vat_rate: float = 21.0
    weight_kg: float | None = None
    lead_time_days: int | None = None
    notes: str | None = None
    specs: dict[str, Any] = field(default_factory=dict)


@dataclass(kw_only=True)
class KitComponent:
    article_version_id: str
    qty: float
    notes: str | None = None


@dataclass(kw_only=True)
class KitVersion(TemplateVersion):
    kit_id: str
    cost_rollup_mode: CostRollupMode = CostRollupMode.SUM_COMPONENTS
    manual_cost_price: float | None = None  # only used in MANUAL mode
    components: list[KitComponent] = field(default_factory=list)
    explode_in_bom: bool = True
    sales_only: bool = False

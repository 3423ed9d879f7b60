"""Domain entity — a build, refit or maintenance project and its configuration."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from boatrecords.domain.entities.base import Archivable, Entity, new_id, utc_now


class ProjectType(str, Enum):
    NEW_BUILD = "NEW_BUILD"
    REFIT = "REFIT"
    MAINTENANCE = "MAINTENANCE"


class ProjectStatus(str, Enum):
    DRAFT = "DRAFT"
    QUOTED = "QUOTED"
    OFFER_SENT = "OFFER_SENT"
    ORDER_CONFIRMED = "ORDER_CONFIRMED"
    IN_PRODUCTION = "IN_PRODUCTION"
    READY_FOR_DELIVERY = "READY_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    CLOSED = "CLOSED"


class PropulsionType(str, Enum):
    ELECTRIC = "Electric"
    HYBRID = "Hybrid"
    DIESEL = "Diesel"
    OUTBOARD = "Outboard"


class ConfigurationItemType(str, Enum):
    ARTICLE = "ARTICLE"
    KIT = "KIT"
    CUSTOM = "CUSTOM"


@dataclass(kw_only=True)
class ConfigurationItem:
    """One quote line. Library lines pin a specific, immutable version id."""

    item_type: ConfigurationItemType
    name: str
    category: str
    quantity: float
    unit: str
    unit_price_excl_vat: float
    id: str = field(default_factory=new_id)

    article_id: str | None = None
    article_version_id: str | None = None
    kit_id: str | None = None
    kit_version_id: str | None = None
    is_custom: bool = False

    subcategory: str | None = None
    article_number: str | None = None
    description: str | None = None

    line_total_excl_vat: float = 0.0
    is_included: bool = True
    ce_relevant: bool = False
    safety_critical: bool = False
    sort_order: int = 0

    @property
    def pinned_version_id(self) -> str | None:
        return self.article_version_id or self.kit_version_id


@dataclass(kw_only=True)
class ProjectConfiguration:
    """Working configuration, editable until frozen.

    Totals are produced by the pricing collaborator and written back
    through the normal update path.
    """

    last_modified_by: str
    propulsion_type: PropulsionType = PropulsionType.ELECTRIC
    boat_model_version_id: str | None = None
    items: list[ConfigurationItem] = field(default_factory=list)

    subtotal_excl_vat: float = 0.0
    discount_percent: float | None = None
    discount_amount: float | None = None
    total_excl_vat: float = 0.0
    vat_rate: float = 21.0
    vat_amount: float = 0.0
    total_incl_vat: float = 0.0

    is_frozen: bool = False
    frozen_at: datetime | None = None
    frozen_by: str | None = None

    last_modified_at: datetime = field(default_factory=utc_now)


@dataclass(kw_only=True)
class Project(Archivable, Entity):
    project_number: str
    title: str
    type: ProjectType
    client_id: str
    configuration: ProjectConfiguration
    created_by: str
    status: ProjectStatus = ProjectStatus.DRAFT
    is_internal: bool = False

"""Pydantic DTOs for the library taxonomy, templates and versions."""

from typing import Any

from pydantic import BaseModel, Field

from boatrecords.domain.entities import ArticleTag, CostRollupMode, KitComponent


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    sort_order: int = 0


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    sort_order: int | None = None


class SubcategoryCreate(BaseModel):
    category_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    sort_order: int = 0


class SubcategoryUpdate(BaseModel):
    category_id: str | None = None
    name: str | None = Field(None, min_length=1, max_length=200)
    sort_order: int | None = None


class ArticleCreate(BaseModel):
    """Schema for a new article template (versions are created separately)."""

    code: str = Field(..., min_length=1, max_length=100, examples=["PROP-SHAFT-040"])
    name: str = Field(..., min_length=1, max_length=200)
    subcategory_id: str = Field(..., min_length=1)
    unit: str = Field("pcs", min_length=1, max_length=20)
    supplier_id: str | None = None
    tags: list[ArticleTag] = Field(default_factory=list)


class ArticleUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    subcategory_id: str | None = None
    unit: str | None = None
    supplier_id: str | None = None
    tags: list[ArticleTag] | None = None


class ArticleVersionCreate(BaseModel):
    sell_price: float = Field(..., ge=0)
    cost_price: float | None = Field(None, ge=0)
    vat_rate: float = Field(21.0, ge=0, le=100)
    weight_kg: float | None = Field(None, ge=0)
    lead_time_days: int | None = Field(None, ge=0)
    notes: str | None = None
    specs: dict[str, Any] = Field(default_factory=dict)


class ArticleVersionUpdate(BaseModel):
    sell_price: float | None = Field(None, ge=0)
    cost_price: float | None = Field(None, ge=0)
    vat_rate: float | None = Field(None, ge=0, le=100)
    weight_kg: float | None = Field(None, ge=0)
    lead_time_days: int | None = Field(None, ge=0)
    notes: str | None = None
    specs: dict[str, Any] | None = None


class KitCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=100, examples=["KIT-PROP-SHAFTLINE-040"])
    name: str = Field(..., min_length=1, max_length=200)
    subcategory_id: str = Field(..., min_length=1)


class KitUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    subcategory_id: str | None = None


class KitVersionCreate(BaseModel):
    sell_price: float = Field(..., ge=0)
    cost_rollup_mode: CostRollupMode = CostRollupMode.SUM_COMPONENTS
    manual_cost_price: float | None = Field(None, ge=0)
    components: list[KitComponent] = Field(default_factory=list)
    explode_in_bom: bool = True
    sales_only: bool = False


class KitVersionUpdate(BaseModel):
    sell_price: float | None = Field(None, ge=0)
    cost_rollup_mode: CostRollupMode | None = None
    manual_cost_price: float | None = Field(None, ge=0)
    components: list[KitComponent] | None = None
    explode_in_bom: bool | None = None
    sales_only: bool | None = None

"""Library taxonomy and template repositories."""

from typing import ClassVar, TypeVar

from boatrecords.application.interfaces import OrderBy, QueryFilter
from boatrecords.application.namespaces import ARTICLES, CATEGORIES, KITS, SUBCATEGORIES
from boatrecords.application.repositories.base import BaseRepository, set_fields
from boatrecords.application.schemas.library import (
    ArticleCreate,
    ArticleUpdate,
    CategoryCreate,
    CategoryUpdate,
    KitCreate,
    KitUpdate,
    SubcategoryCreate,
    SubcategoryUpdate,
)
from boatrecords.domain.entities import (
    AuditContext,
    LibraryArticle,
    LibraryCategory,
    LibraryKit,
    LibrarySubcategory,
    new_id,
    utc_now,
)
from boatrecords.domain.exceptions import DuplicateEntityError

T = TypeVar("T", LibraryArticle, LibraryKit)

_BY_SORT_ORDER = OrderBy("sort_order")


class CategoryRepository(BaseRepository[LibraryCategory]):
    namespace = CATEGORIES
    entity_label = "LibraryCategory"

    async def get_all(self) -> list[LibraryCategory]:
        return await self.query(QueryFilter(order_by=_BY_SORT_ORDER))

    async def create(self, data: CategoryCreate, context: AuditContext) -> LibraryCategory:
        now = utc_now()
        category = LibraryCategory(
            id=new_id(), created_at=now, updated_at=now, version=1, **data.model_dump()
        )
        return await self._insert(category, context)

    async def update(
        self, category_id: str, data: CategoryUpdate, context: AuditContext
    ) -> LibraryCategory:
        category = await self.require(category_id)
        return await self._apply_update(category, set_fields(data), context)

    async def delete(self, category_id: str, context: AuditContext) -> bool:
        return await self._hard_delete(category_id, context)


class SubcategoryRepository(BaseRepository[LibrarySubcategory]):
    namespace = SUBCATEGORIES
    entity_label = "LibrarySubcategory"

    async def get_all(self) -> list[LibrarySubcategory]:
        return await self.query(QueryFilter(order_by=_BY_SORT_ORDER))

    async def get_by_category(self, category_id: str) -> list[LibrarySubcategory]:
        return await self.query(
            QueryFilter(where={"category_id": category_id}, order_by=_BY_SORT_ORDER)
        )

    async def create(
        self, data: SubcategoryCreate, context: AuditContext
    ) -> LibrarySubcategory:
        now = utc_now()
        subcategory = LibrarySubcategory(
            id=new_id(), created_at=now, updated_at=now, version=1, **data.model_dump()
        )
        return await self._insert(subcategory, context)

    async def update(
        self, subcategory_id: str, data: SubcategoryUpdate, context: AuditContext
    ) -> LibrarySubcategory:
        subcategory = await self.require(subcategory_id)
        return await self._apply_update(subcategory, set_fields(data), context)

    async def delete(self, subcategory_id: str, context: AuditContext) -> bool:
        return await self._hard_delete(subcategory_id, context)


class _TemplateRepository(BaseRepository[T]):
    """Articles and kits: coded templates grouped under a subcategory."""

    template_type: ClassVar[type]

    async def get_by_subcategory(self, subcategory_id: str) -> list[T]:
        return await self.query(QueryFilter(where={"subcategory_id": subcategory_id}))

    async def get_by_code(self, code: str) -> T | None:
        matches = await self.query(QueryFilter(where={"code": code}, limit=1))
        return matches[0] if matches else None

    async def search(self, term: str) -> list[T]:
        """Case-insensitive match on code or name."""
        needle = term.strip().lower()
        templates = await self.get_all()
        if not needle:
            return templates
        return [
            t for t in templates if needle in t.code.lower() or needle in t.name.lower()
        ]

    async def _create(self, fields: dict, context: AuditContext) -> T:
        if await self.get_by_code(fields["code"]) is not None:
            raise DuplicateEntityError(self.entity_label, "code", fields["code"])
        now = utc_now()
        template = self.template_type(
            id=new_id(), created_at=now, updated_at=now, version=1, **fields
        )
        return await self._insert(template, context)

    async def delete(self, template_id: str, context: AuditContext) -> bool:
        return await self._hard_delete(template_id, context)


class ArticleRepository(_TemplateRepository[LibraryArticle]):
    namespace = ARTICLES
    entity_label = "LibraryArticle"
    template_type = LibraryArticle

    async def create(self, data: ArticleCreate, context: AuditContext) -> LibraryArticle:
        return await self._create(data.model_dump(), context)

    async def update(
        self, article_id: str, data: ArticleUpdate, context: AuditContext
    ) -> LibraryArticle:
        article = await self.require(article_id)
        return await self._apply_update(article, set_fields(data), context)


class KitRepository(_TemplateRepository[LibraryKit]):
    namespace = KITS
    entity_label = "LibraryKit"
    template_type = LibraryKit

    async def create(self, data: KitCreate, context: AuditContext) -> LibraryKit:
        return await self._create(data.model_dump(), context)

    async def update(
        self, kit_id: str, data: KitUpdate, context: AuditContext
    ) -> LibraryKit:
        kit = await self.require(kit_id)
        return await self._apply_update(kit, set_fields(data), context)

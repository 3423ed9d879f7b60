"""Library seed service: bootstraps the taxonomy and sample articles from YAML.

Both steps check existence first and do nothing when their namespace already
holds records, so running the seed twice is harmless.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from boatrecords.application.repositories.library_repository import (
    ArticleRepository,
    CategoryRepository,
    SubcategoryRepository,
)
from boatrecords.application.repositories.library_version_repository import (
    ArticleVersionRepository,
)
from boatrecords.application.schemas.library import (
    ArticleCreate,
    ArticleVersionCreate,
    CategoryCreate,
    SubcategoryCreate,
)
from boatrecords.domain.entities import ArticleTag, AuditContext

logger = logging.getLogger(__name__)


class CategorySeed(BaseModel):
    name: str = Field(..., min_length=1)
    subcategories: list[str] = Field(default_factory=list)


class ArticleSeed(BaseModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    subcategory: str
    unit: str = "pcs"
    sell_price: float = Field(..., ge=0)
    cost_price: float | None = Field(None, ge=0)
    tags: list[ArticleTag] = Field(default_factory=list)


class LibrarySeed(BaseModel):
    categories: list[CategorySeed] = Field(default_factory=list)
    sample_articles: list[ArticleSeed] = Field(default_factory=list)


@dataclass
class SeedResult:
    categories: int = 0
    subcategories: int = 0
    articles: int = 0


def load_seed_file(path: str | Path) -> LibrarySeed:
    """Parse and validate a seed YAML file."""
    with open(path, encoding="utf-8") as handle:
        parsed: Any = yaml.safe_load(handle)
    if parsed is None:
        return LibrarySeed()
    if not isinstance(parsed, dict):
        raise ValueError(f"Seed file must contain a top-level mapping: {path}")
    return LibrarySeed.model_validate(parsed)


class LibrarySeedService:
    def __init__(
        self,
        categories: CategoryRepository,
        subcategories: SubcategoryRepository,
        articles: ArticleRepository,
        article_versions: ArticleVersionRepository,
    ):
        self._categories = categories
        self._subcategories = subcategories
        self._articles = articles
        self._article_versions = article_versions

    async def seed_from_file(self, path: str | Path, context: AuditContext) -> SeedResult:
        return await self.seed(load_seed_file(path), context)

    async def seed(self, data: LibrarySeed, context: AuditContext) -> SeedResult:
        result = SeedResult()
        await self._initialize_taxonomy(data.categories, context, result)
        await self._seed_sample_articles(data.sample_articles, context, result)
        return result

    async def _initialize_taxonomy(
        self, categories: list[CategorySeed], context: AuditContext, result: SeedResult
    ) -> None:
        if await self._categories.count() > 0:
            logger.info("Library taxonomy already initialized")
            return

        for cat_index, cat_seed in enumerate(categories):
            category = await self._categories.create(
                CategoryCreate(name=cat_seed.name, sort_order=cat_index), context
            )
            result.categories += 1
            for sub_index, sub_name in enumerate(cat_seed.subcategories):
                await self._subcategories.create(
                    SubcategoryCreate(
                        category_id=category.id, name=sub_name, sort_order=sub_index
                    ),
                    context,
                )
                result.subcategories += 1

        logger.info(
            "Library taxonomy initialized with %d categories, %d subcategories",
            result.categories, result.subcategories,
        )

    async def _seed_sample_articles(
        self, articles: list[ArticleSeed], context: AuditContext, result: SeedResult
    ) -> None:
        if await self._articles.count() > 0:
            logger.info("Sample articles already exist")
            return

        subcategory_ids = {s.name: s.id for s in await self._subcategories.get_all()}
        for seed in articles:
            subcategory_id = subcategory_ids.get(seed.subcategory)
            if subcategory_id is None:
                logger.warning(
                    "Skipping sample article %s: unknown subcategory %r",
                    seed.code, seed.subcategory,
                )
                continue
            article = await self._articles.create(
                ArticleCreate(
                    code=seed.code,
                    name=seed.name,
                    subcategory_id=subcategory_id,
                    unit=seed.unit,
                    tags=seed.tags,
                ),
                context,
            )
            version = await self._article_versions.create_version(
                article.id,
                ArticleVersionCreate(sell_price=seed.sell_price, cost_price=seed.cost_price),
                context,
            )
            await self._article_versions.approve(version.id, context)
            result.articles += 1

        logger.info("Seeded %d sample articles", result.articles)

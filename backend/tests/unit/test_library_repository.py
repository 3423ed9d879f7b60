"""Unit tests for the library taxonomy, templates and versions."""

import pytest

from boatrecords.application.schemas import (
    ArticleCreate,
    ArticleUpdate,
    ArticleVersionCreate,
    ArticleVersionUpdate,
    CategoryCreate,
    KitCreate,
    KitVersionCreate,
    ProjectCreate,
    SubcategoryCreate,
)
from boatrecords.domain.entities import (
    AuditAction,
    AuditContext,
    ConfigurationItem,
    ConfigurationItemType,
    KitComponent,
    ProjectType,
    VersionStatus,
)
from boatrecords.domain.exceptions import (
    DomainRuleViolationError,
    DuplicateEntityError,
    EntityNotFoundError,
)
from boatrecords.infrastructure.dependencies import Repositories, build_repositories
from boatrecords.infrastructure.persistence import InMemoryMedium, KeyValueStoreAdapter

CONTEXT = AuditContext(user_id="u1", user_name="Anna")


@pytest.fixture
def repos() -> Repositories:
    return build_repositories(KeyValueStoreAdapter(InMemoryMedium()))


async def _article(repos: Repositories, code: str = "PROP-SHAFT-040", name: str = "Shaft 40mm"):
    category = await repos.categories.create(CategoryCreate(name="Propulsion"), CONTEXT)
    subcategory = await repos.subcategories.create(
        SubcategoryCreate(category_id=category.id, name="Shaftline"), CONTEXT
    )
    article = await repos.articles.create(
        ArticleCreate(code=code, name=name, subcategory_id=subcategory.id), CONTEXT
    )
    return subcategory, article


# ── Taxonomy ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_categories_and_subcategories_sorted_by_sort_order(repos: Repositories):
    deck = await repos.categories.create(CategoryCreate(name="Deck", sort_order=2), CONTEXT)
    await repos.categories.create(CategoryCreate(name="Hull", sort_order=0), CONTEXT)
    await repos.categories.create(CategoryCreate(name="Propulsion", sort_order=1), CONTEXT)

    assert [c.name for c in await repos.categories.get_all()] == ["Hull", "Propulsion", "Deck"]

    await repos.subcategories.create(
        SubcategoryCreate(category_id=deck.id, name="Hatches", sort_order=5), CONTEXT
    )
    await repos.subcategories.create(
        SubcategoryCreate(category_id=deck.id, name="Cleats", sort_order=1), CONTEXT
    )
    await repos.subcategories.create(
        SubcategoryCreate(category_id="elsewhere", name="Other", sort_order=0), CONTEXT
    )

    names = [s.name for s in await repos.subcategories.get_by_category(deck.id)]
    assert names == ["Cleats", "Hatches"]


@pytest.mark.asyncio
async def test_category_delete_is_hard_and_reports_absence(repos: Repositories):
    category = await repos.categories.create(CategoryCreate(name="Temp"), CONTEXT)

    assert await repos.categories.delete(category.id, CONTEXT) is True
    assert await repos.categories.get_by_id(category.id) is None
    assert await repos.categories.delete(category.id, CONTEXT) is False


# ── Templates ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_duplicate_article_code_is_rejected(repos: Repositories):
    subcategory, _ = await _article(repos)

    with pytest.raises(DuplicateEntityError):
        await repos.articles.create(
            ArticleCreate(code="PROP-SHAFT-040", name="Copy", subcategory_id=subcategory.id),
            CONTEXT,
        )


@pytest.mark.asyncio
async def test_code_lookup_is_exact_and_search_is_case_insensitive(repos: Repositories):
    subcategory, article = await _article(repos)
    await repos.articles.create(
        ArticleCreate(code="PROP-PROP-3B", name="Propeller 3 blade", subcategory_id=subcategory.id),
        CONTEXT,
    )

    assert (await repos.articles.get_by_code("PROP-SHAFT-040")).id == article.id
    assert await repos.articles.get_by_code("prop-shaft-040") is None

    assert [a.code for a in await repos.articles.search("shaft")] == ["PROP-SHAFT-040"]
    assert [a.code for a in await repos.articles.search("PROPELLER")] == ["PROP-PROP-3B"]
    assert len(await repos.articles.get_by_subcategory(subcategory.id)) == 2


@pytest.mark.asyncio
async def test_article_update_bumps_version_and_audits(repos: Repositories):
    _, article = await _article(repos)

    updated = await repos.articles.update(article.id, ArticleUpdate(name="Shaft 40mm SS"), CONTEXT)

    assert updated.name == "Shaft 40mm SS"
    assert updated.version == article.version + 1
    history = await repos.audit.get_history("LibraryArticle", article.id)
    assert [e.action for e in history] == [AuditAction.UPDATE, AuditAction.CREATE]
    assert history[0].before["name"] == "Shaft 40mm"
    assert history[0].after["name"] == "Shaft 40mm SS"


@pytest.mark.asyncio
async def test_kit_version_components_survive_storage(repos: Repositories):
    _, article = await _article(repos)
    part = await repos.article_versions.create_version(
        article.id, ArticleVersionCreate(sell_price=300), CONTEXT
    )
    kit = await repos.kits.create(
        KitCreate(code="KIT-SHAFTLINE", name="Shaftline kit", subcategory_id=article.subcategory_id),
        CONTEXT,
    )

    version = await repos.kit_versions.create_version(
        kit.id,
        KitVersionCreate(
            sell_price=900,
            components=[KitComponent(article_version_id=part.id, qty=2)],
        ),
        CONTEXT,
    )

    stored = await repos.kit_versions.get_by_id(version.id)
    assert stored.components == [KitComponent(article_version_id=part.id, qty=2)]
    assert [v.id for v in await repos.kit_versions.get_by_kit(kit.id)] == [version.id]


# ── Versions ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_version_numbers_sequentially(repos: Repositories):
    _, article = await _article(repos)
    for price in (100, 110, 120):
        await repos.article_versions.create_version(
            article.id, ArticleVersionCreate(sell_price=price), CONTEXT
        )

    versions = await repos.article_versions.get_by_article(article.id)
    assert [v.version_number for v in versions] == [3, 2, 1]
    assert all(v.status == VersionStatus.DRAFT for v in versions)


@pytest.mark.asyncio
async def test_create_version_for_missing_article_raises(repos: Repositories):
    with pytest.raises(EntityNotFoundError):
        await repos.article_versions.create_version(
            "missing", ArticleVersionCreate(sell_price=1), CONTEXT
        )


@pytest.mark.asyncio
async def test_approve_sets_current_version_and_freezes_content(repos: Repositories):
    _, article = await _article(repos)
    draft = await repos.article_versions.create_version(
        article.id, ArticleVersionCreate(sell_price=100), CONTEXT
    )

    approved = await repos.article_versions.approve(draft.id, CONTEXT)

    assert approved.status == VersionStatus.APPROVED
    assert approved.approved_by == "u1"
    assert approved.approved_at is not None
    assert (await repos.articles.get_by_id(article.id)).current_version_id == draft.id
    assert (await repos.article_versions.get_latest_approved(article.id)).id == draft.id

    with pytest.raises(DomainRuleViolationError):
        await repos.article_versions.update_draft(
            draft.id, ArticleVersionUpdate(sell_price=1), CONTEXT
        )
    with pytest.raises(DomainRuleViolationError):
        await repos.article_versions.approve(draft.id, CONTEXT)
    with pytest.raises(DomainRuleViolationError):
        await repos.article_versions.delete(draft.id, CONTEXT)


@pytest.mark.asyncio
async def test_drafts_can_be_edited_and_deleted(repos: Repositories):
    _, article = await _article(repos)
    draft = await repos.article_versions.create_version(
        article.id, ArticleVersionCreate(sell_price=100), CONTEXT
    )

    edited = await repos.article_versions.update_draft(
        draft.id, ArticleVersionUpdate(sell_price=125, notes="New supplier"), CONTEXT
    )
    assert edited.sell_price == 125
    assert edited.notes == "New supplier"

    assert await repos.article_versions.delete(draft.id, CONTEXT) is True
    assert await repos.article_versions.delete(draft.id, CONTEXT) is False


@pytest.mark.asyncio
async def test_approved_queries(repos: Repositories):
    _, article = await _article(repos)
    v1 = await repos.article_versions.create_version(
        article.id, ArticleVersionCreate(sell_price=100), CONTEXT
    )
    v2 = await repos.article_versions.create_version(
        article.id, ArticleVersionCreate(sell_price=120), CONTEXT
    )
    await repos.article_versions.create_version(
        article.id, ArticleVersionCreate(sell_price=130), CONTEXT
    )
    await repos.article_versions.approve(v1.id, CONTEXT)
    await repos.article_versions.approve(v2.id, CONTEXT)

    assert {v.id for v in await repos.article_versions.get_approved()} == {v1.id, v2.id}
    approved = await repos.article_versions.get_approved_for_parent(article.id)
    assert [v.id for v in approved] == [v2.id, v1.id]
    assert (await repos.article_versions.get_latest_approved(article.id)).id == v2.id


@pytest.mark.asyncio
async def test_pinned_version_is_unchanged_after_new_version(repos: Repositories):
    _, article = await _article(repos)
    v1 = await repos.article_versions.create_version(
        article.id, ArticleVersionCreate(sell_price=100, specs={"diameter_mm": 40}), CONTEXT
    )
    v1 = await repos.article_versions.approve(v1.id, CONTEXT)

    project = await repos.projects.create(
        ProjectCreate(title="Refit Eendracht", type=ProjectType.REFIT, client_id="c1"), CONTEXT
    )
    configuration = project.configuration
    configuration.items.append(
        ConfigurationItem(
            item_type=ConfigurationItemType.ARTICLE,
            name=article.name,
            category="Propulsion",
            quantity=1,
            unit="pcs",
            unit_price_excl_vat=v1.sell_price,
            article_id=article.id,
            article_version_id=v1.id,
        )
    )
    await repos.projects.update_configuration(project.id, configuration, CONTEXT)

    v2 = await repos.article_versions.create_version(
        article.id, ArticleVersionCreate(sell_price=150, specs={"diameter_mm": 45}), CONTEXT
    )
    await repos.article_versions.approve(v2.id, CONTEXT)

    reloaded = await repos.projects.get_by_id(project.id)
    pinned_id = reloaded.configuration.items[0].pinned_version_id
    pinned = await repos.article_versions.get_by_id(pinned_id)
    assert pinned == v1
    assert (await repos.articles.get_by_id(article.id)).current_version_id == v2.id

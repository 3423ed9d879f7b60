"""Article and kit version repositories.

Versions move one way, DRAFT → APPROVED. An approved version is immutable
and is never deleted, so a configuration that pinned its id can always be
re-read and priced the same way.
"""

import logging
from typing import ClassVar, TypeVar

from pydantic import BaseModel

from boatrecords.application.interfaces import Namespace, OrderBy, QueryFilter, SortDirection
from boatrecords.application.namespaces import ARTICLE_VERSIONS, ARTICLES, KIT_VERSIONS, KITS
from boatrecords.application.repositories.base import BaseRepository, set_fields
from boatrecords.application.schemas.library import (
    ArticleVersionCreate,
    ArticleVersionUpdate,
    KitVersionCreate,
    KitVersionUpdate,
)
from boatrecords.application.serialization import snapshot
from boatrecords.domain.entities import (
    AuditContext,
    ArticleVersion,
    KitVersion,
    VersionStatus,
    new_id,
    utc_now,
)
from boatrecords.domain.exceptions import DomainRuleViolationError, EntityNotFoundError

logger = logging.getLogger(__name__)

V = TypeVar("V", ArticleVersion, KitVersion)

_NEWEST_FIRST = OrderBy("version_number", SortDirection.DESC)


class _VersionRepository(BaseRepository[V]):
    parent_namespace: ClassVar[Namespace]
    parent_field: ClassVar[str]
    version_type: ClassVar[type]

    async def get_by_parent(self, parent_id: str) -> list[V]:
        """All versions of one template, newest version number first."""
        return await self.query(
            QueryFilter(where={self.parent_field: parent_id}, order_by=_NEWEST_FIRST)
        )

    async def get_approved(self) -> list[V]:
        return await self.query(QueryFilter(where={"status": VersionStatus.APPROVED}))

    async def get_approved_for_parent(self, parent_id: str) -> list[V]:
        return await self.query(
            QueryFilter(
                where={self.parent_field: parent_id, "status": VersionStatus.APPROVED},
                order_by=_NEWEST_FIRST,
            )
        )

    async def get_latest_approved(self, parent_id: str) -> V | None:
        approved = await self.get_approved_for_parent(parent_id)
        return approved[0] if approved else None

    async def _create_version(
        self, parent_id: str, data: BaseModel, context: AuditContext
    ) -> V:
        parent = await self._adapter.get_by_id(self.parent_namespace, parent_id)
        if parent is None:
            raise EntityNotFoundError(self.parent_namespace.entity_type.__name__, parent_id)

        existing = await self.get_by_parent(parent_id)
        number = max((v.version_number for v in existing), default=0) + 1
        now = utc_now()
        version = self.version_type(
            id=new_id(),
            created_at=now,
            updated_at=now,
            version=1,
            version_number=number,
            status=VersionStatus.DRAFT,
            **{self.parent_field: parent_id},
            **dict(data),
        )
        return await self._insert(version, context)

    async def _update_draft(
        self, version_id: str, data: BaseModel, context: AuditContext
    ) -> V:
        version = await self.require(version_id)
        if version.is_approved:
            raise DomainRuleViolationError(
                self.entity_label, "approved versions are immutable"
            )
        return await self._apply_update(version, set_fields(data), context)

    async def approve(self, version_id: str, context: AuditContext) -> V:
        """Approve a draft and make it the template's current version."""
        version = await self.require(version_id)
        if version.is_approved:
            raise DomainRuleViolationError(
                self.entity_label, f"version {version.version_number} is already approved"
            )
        version.status = VersionStatus.APPROVED
        version.approved_at = utc_now()
        version.approved_by = context.user_id
        version.touch()
        await self._adapter.save(self.namespace, version)
        await self._audit.log_approval(
            context, self.entity_label, version.id, str(version.version_number)
        )

        parent_id = getattr(version, self.parent_field)
        parent = await self._adapter.get_by_id(self.parent_namespace, parent_id)
        if parent is None:
            logger.warning(
                "Approved %s %s whose template %s no longer exists",
                self.entity_label, version.id, parent_id,
            )
            return version
        before = snapshot(parent)
        parent.current_version_id = version.id
        parent.touch()
        await self._adapter.save(self.parent_namespace, parent)
        await self._audit.log_update(
            context,
            self.parent_namespace.entity_type.__name__,
            parent.id,
            before,
            snapshot(parent),
        )
        return version

    async def delete(self, version_id: str, context: AuditContext) -> bool:
        """Delete a draft. Returns False when the id is unknown."""
        version = await self.get_by_id(version_id)
        if version is None:
            return False
        if version.is_approved:
            raise DomainRuleViolationError(
                self.entity_label, "approved versions cannot be deleted"
            )
        return await self._hard_delete(version_id, context)


class ArticleVersionRepository(_VersionRepository[ArticleVersion]):
    namespace = ARTICLE_VERSIONS
    entity_label = "ArticleVersion"
    parent_namespace = ARTICLES
    parent_field = "article_id"
    version_type = ArticleVersion

    async def get_by_article(self, article_id: str) -> list[ArticleVersion]:
        return await self.get_by_parent(article_id)

    async def create_version(
        self, article_id: str, data: ArticleVersionCreate, context: AuditContext
    ) -> ArticleVersion:
        return await self._create_version(article_id, data, context)

    async def update_draft(
        self, version_id: str, data: ArticleVersionUpdate, context: AuditContext
    ) -> ArticleVersion:
        return await self._update_draft(version_id, data, context)


class KitVersionRepository(_VersionRepository[KitVersion]):
    namespace = KIT_VERSIONS
    entity_label = "KitVersion"
    parent_namespace = KITS
    parent_field = "kit_id"
    version_type = KitVersion

    async def get_by_kit(self, kit_id: str) -> list[KitVersion]:
        return await self.get_by_parent(kit_id)

    async def create_version(
        self, kit_id: str, data: KitVersionCreate, context: AuditContext
    ) -> KitVersion:
        return await self._create_version(kit_id, data, context)

    async def update_draft(
        self, version_id: str, data: KitVersionUpdate, context: AuditContext
    ) -> KitVersion:
        return await self._update_draft(version_id, data, context)

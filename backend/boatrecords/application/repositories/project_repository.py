"""Project repository: header, lifecycle status and the working configuration.

The configuration is edited in place until it is frozen. Library lines in it
pin an approved article or kit version id; once a project has chosen a boat
model version that pin cannot be swapped through a configuration update.
"""

import logging
from collections.abc import Sequence
from copy import deepcopy
from dataclasses import replace

from boatrecords.application.interfaces import OrderBy, QueryFilter, SortDirection
from boatrecords.application.namespaces import PROJECTS
from boatrecords.application.repositories.base import BaseRepository, next_number, set_fields
from boatrecords.application.schemas.project import ProjectCreate, ProjectUpdate
from boatrecords.application.serialization import snapshot
from boatrecords.domain.entities import (
    AuditContext,
    Project,
    ProjectConfiguration,
    ProjectStatus,
    new_id,
    utc_now,
)
from boatrecords.domain.exceptions import DomainRuleViolationError

logger = logging.getLogger(__name__)

PROJECT_NUMBER_PREFIX = "PRJ"

_NEWEST_FIRST = OrderBy("created_at", SortDirection.DESC)


class ProjectRepository(BaseRepository[Project]):
    namespace = PROJECTS
    entity_label = "Project"

    async def get_by_status(self, status: ProjectStatus) -> list[Project]:
        return await self.query(
            QueryFilter(
                where={"status": status, "archived_at": None}, order_by=_NEWEST_FIRST
            )
        )

    async def get_by_client(self, client_id: str) -> list[Project]:
        return await self.query(
            QueryFilter(
                where={"client_id": client_id, "archived_at": None},
                order_by=_NEWEST_FIRST,
            )
        )

    async def get_active(self) -> list[Project]:
        """Non-archived projects that are not closed, newest first."""
        projects = await self.query(
            QueryFilter(where={"archived_at": None}, order_by=_NEWEST_FIRST)
        )
        return [p for p in projects if p.status != ProjectStatus.CLOSED]

    async def get_by_number(self, project_number: str) -> Project | None:
        matches = await self.query(
            QueryFilter(where={"project_number": project_number}, limit=1)
        )
        return matches[0] if matches else None

    async def search(self, term: str) -> list[Project]:
        needle = term.strip().lower()
        projects = await self.get_all()
        if not needle:
            return projects
        return [
            p
            for p in projects
            if needle in p.title.lower() or needle in p.project_number.lower()
        ]

    async def import_entities(
        self, entities: Sequence[Project], context: AuditContext
    ) -> int:
        """Version-aware merge that never overwrites a frozen project."""
        frozen = {
            p.id for p in await self.get_all() if p.configuration.is_frozen
        }
        if frozen:
            logger.info("Import leaves %d frozen project(s) untouched", len(frozen))
        return await super().import_entities(
            [p for p in entities if p.id not in frozen], context
        )

    async def create(self, data: ProjectCreate, context: AuditContext) -> Project:
        existing = await self.get_all()
        now = utc_now()
        project = Project(
            id=new_id(),
            created_at=now,
            updated_at=now,
            version=1,
            project_number=next_number(
                PROJECT_NUMBER_PREFIX, [p.project_number for p in existing]
            ),
            title=data.title,
            type=data.type,
            client_id=data.client_id,
            is_internal=data.is_internal,
            created_by=context.user_id,
            configuration=ProjectConfiguration(
                last_modified_by=context.user_id,
                last_modified_at=now,
                propulsion_type=data.propulsion_type,
                boat_model_version_id=data.boat_model_version_id,
            ),
        )
        return await self._insert(project, context)

    async def update(
        self, project_id: str, data: ProjectUpdate, context: AuditContext
    ) -> Project:
        project = await self.require(project_id)
        return await self._apply_update(project, set_fields(data), context)

    async def update_status(
        self,
        project_id: str,
        status: ProjectStatus,
        context: AuditContext,
        reason: str | None = None,
    ) -> Project:
        project = await self.require(project_id)
        previous = project.status
        if previous == status:
            return project
        project.status = status
        project.touch()
        await self._adapter.save(self.namespace, project)
        await self._audit.log_status_transition(
            context, self.entity_label, project.id, previous.value, status.value, reason
        )
        return project

    async def update_configuration(
        self,
        project_id: str,
        configuration: ProjectConfiguration,
        context: AuditContext,
    ) -> Project:
        """Replace the working configuration.

        Raises:
            DomainRuleViolationError: If the configuration is frozen, or the
                update would repoint an already chosen boat model version.
        """
        project = await self.require(project_id)
        current = project.configuration
        if current.is_frozen:
            raise DomainRuleViolationError(
                self.entity_label, "a frozen configuration cannot be edited"
            )
        if (
            current.boat_model_version_id is not None
            and configuration.boat_model_version_id != current.boat_model_version_id
        ):
            raise DomainRuleViolationError(
                self.entity_label, "the pinned boat model version cannot be changed"
            )

        before = snapshot(project)
        project.configuration = replace(
            configuration,
            items=deepcopy(configuration.items),
            is_frozen=False,
            frozen_at=None,
            frozen_by=None,
            last_modified_at=utc_now(),
            last_modified_by=context.user_id,
        )
        project.touch()
        await self._adapter.save(self.namespace, project)
        await self._audit.log_update(
            context, self.entity_label, project.id, before, snapshot(project)
        )
        return project

    async def freeze_configuration(
        self, project_id: str, context: AuditContext
    ) -> Project:
        project = await self.require(project_id)
        configuration = project.configuration
        if configuration.is_frozen:
            raise DomainRuleViolationError(
                self.entity_label, "configuration is already frozen"
            )
        now = utc_now()
        configuration.is_frozen = True
        configuration.frozen_at = now
        configuration.frozen_by = context.user_id
        project.touch()
        await self._adapter.save(self.namespace, project)
        await self._audit.log_freeze(context, project.id, now)
        logger.info("Froze configuration of %s", project.project_number)
        return project

    async def archive(
        self, project_id: str, reason: str, context: AuditContext
    ) -> Project:
        project = await self.require(project_id)
        project.archived_at = utc_now()
        project.archived_by = context.user_id
        project.archive_reason = reason
        project.touch()
        await self._adapter.save(self.namespace, project)
        await self._audit.log_archive(context, self.entity_label, project.id, reason)
        return project

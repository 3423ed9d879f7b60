"""Audit logging helpers.

The only sanctioned way product code writes audit entries. Each helper fixes
the description text and metadata shape for its action kind so entries can be
queried and reported on uniformly.

Audit writes happen after the primary mutation and are not transactional with
it: if the process dies in between, the audit entry is lost (at-most-once).
"""

import logging
from datetime import datetime
from typing import Any

from boatrecords.application.repositories.audit_repository import AuditRepository
from boatrecords.application.schemas.audit import AuditEntryCreate
from boatrecords.domain.entities import AuditAction, AuditContext, AuditEntry

logger = logging.getLogger(__name__)

EMERGENCY_WARNING_LEVEL = "CRITICAL"


class AuditService:
    """Writes standardized audit entries and reads history back."""

    def __init__(self, repository: AuditRepository, recent_limit: int = 50):
        self._repository = repository
        self._recent_limit = recent_limit

    @property
    def repository(self) -> AuditRepository:
        return self._repository

    async def log(
        self,
        context: AuditContext,
        action: AuditAction,
        entity_type: str,
        entity_id: str,
        description: str,
        *,
        before: dict[str, Any] | None = None,
        after: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> AuditEntry:
        return await self._repository.create(
            AuditEntryCreate(
                user_id=context.user_id,
                user_name=context.user_name,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                description=description,
                before=before,
                after=after,
                metadata=metadata,
            )
        )

    async def log_create(
        self,
        context: AuditContext,
        entity_type: str,
        entity_id: str,
        entity: dict[str, Any],
    ) -> AuditEntry:
        return await self.log(
            context, AuditAction.CREATE, entity_type, entity_id,
            f"Created {entity_type}", after=entity,
        )

    async def log_update(
        self,
        context: AuditContext,
        entity_type: str,
        entity_id: str,
        before: dict[str, Any],
        after: dict[str, Any],
    ) -> AuditEntry:
        return await self.log(
            context, AuditAction.UPDATE, entity_type, entity_id,
            f"Updated {entity_type}", before=before, after=after,
        )

    async def log_delete(
        self,
        context: AuditContext,
        entity_type: str,
        entity_id: str,
        before: dict[str, Any],
    ) -> AuditEntry:
        return await self.log(
            context, AuditAction.DELETE, entity_type, entity_id,
            f"Deleted {entity_type}", before=before,
        )

    async def log_archive(
        self,
        context: AuditContext,
        entity_type: str,
        entity_id: str,
        reason: str,
    ) -> AuditEntry:
        return await self.log(
            context, AuditAction.ARCHIVE, entity_type, entity_id,
            f"Archived {entity_type}: {reason}", metadata={"reason": reason},
        )

    async def log_status_transition(
        self,
        context: AuditContext,
        entity_type: str,
        entity_id: str,
        from_status: str,
        to_status: str,
        reason: str | None = None,
    ) -> AuditEntry:
        suffix = f" ({reason})" if reason else ""
        return await self.log(
            context, AuditAction.STATUS_TRANSITION, entity_type, entity_id,
            f"{entity_type} status: {from_status} → {to_status}{suffix}",
            metadata={"from_status": from_status, "to_status": to_status, "reason": reason},
        )

    async def log_approval(
        self,
        context: AuditContext,
        entity_type: str,
        entity_id: str,
        version: str,
    ) -> AuditEntry:
        return await self.log(
            context, AuditAction.APPROVE, entity_type, entity_id,
            f"Approved {entity_type} version {version}", metadata={"version": version},
        )

    async def log_freeze(
        self,
        context: AuditContext,
        project_id: str,
        frozen_at: datetime,
    ) -> AuditEntry:
        return await self.log(
            context, AuditAction.FREEZE, "Project", project_id,
            "Configuration frozen", metadata={"frozen_at": frozen_at.isoformat()},
        )

    async def log_document_generation(
        self,
        context: AuditContext,
        project_id: str,
        document_id: str,
        document_type: str,
    ) -> AuditEntry:
        return await self.log(
            context, AuditAction.GENERATE_DOCUMENT, "ProjectDocument", document_id,
            f"Generated {document_type}",
            metadata={"project_id": project_id, "document_type": document_type},
        )

    async def log_amendment(
        self,
        context: AuditContext,
        project_id: str,
        amendment_id: str,
        amendment_type: str,
        reason: str,
        price_impact: float,
    ) -> AuditEntry:
        return await self.log(
            context, AuditAction.AMENDMENT, "Project", project_id,
            f"Amendment: {amendment_type} - {reason}",
            metadata={
                "amendment_id": amendment_id,
                "amendment_type": amendment_type,
                "reason": reason,
                "price_impact": price_impact,
            },
        )

    async def log_emergency_unlock(
        self,
        context: AuditContext,
        project_id: str,
        reason: str,
    ) -> AuditEntry:
        logger.warning("Emergency unlock of project %s by %s: %s", project_id, context.user_id, reason)
        return await self.log(
            context, AuditAction.EMERGENCY_UNLOCK, "Project", project_id,
            f"EMERGENCY UNLOCK: {reason}",
            metadata={"reason": reason, "warning_level": EMERGENCY_WARNING_LEVEL},
        )

    async def log_import(
        self,
        context: AuditContext,
        entity_type: str,
        imported: int,
        skipped: int,
    ) -> AuditEntry:
        return await self.log(
            context, AuditAction.IMPORT, entity_type, "*",
            f"Imported {imported} {entity_type} record(s), skipped {skipped}",
            metadata={"imported": imported, "skipped": skipped},
        )

    # ── Reads ────────────────────────────────────────────────────────

    async def get_history(self, entity_type: str, entity_id: str) -> list[AuditEntry]:
        return await self._repository.get_by_entity(entity_type, entity_id)

    async def get_by_user(self, user_id: str) -> list[AuditEntry]:
        return await self._repository.get_by_user(user_id)

    async def get_recent(self, limit: int | None = None) -> list[AuditEntry]:
        return await self._repository.get_recent(
            self._recent_limit if limit is None else limit
        )

    async def get_all(self) -> list[AuditEntry]:
        return await self._repository.get_all()

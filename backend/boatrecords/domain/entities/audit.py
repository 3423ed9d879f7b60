"""Domain entity — an append-only audit ledger entry."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from boatrecords.domain.entities.base import Entity


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ARCHIVE = "ARCHIVE"
    STATUS_TRANSITION = "STATUS_TRANSITION"
    APPROVE = "APPROVE"
    FREEZE = "FREEZE"
    GENERATE_DOCUMENT = "GENERATE_DOCUMENT"
    AMENDMENT = "AMENDMENT"
    EMERGENCY_UNLOCK = "EMERGENCY_UNLOCK"
    IMPORT = "IMPORT"


@dataclass(kw_only=True)
class AuditEntry(Entity):
    """Who did what to which record. Never updated once written.

    ``timestamp`` equals ``created_at``.
    """

    timestamp: datetime

    user_id: str
    user_name: str

    action: AuditAction
    entity_type: str
    entity_id: str

    description: str
    before: dict[str, Any] | None = None
    after: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class AuditContext:
    """The acting user, passed to every audited mutation."""

    user_id: str
    user_name: str

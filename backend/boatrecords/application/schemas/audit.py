"""Pydantic DTO for appending to the audit ledger."""

from typing import Any

from pydantic import BaseModel, Field

from boatrecords.domain.entities import AuditAction


class AuditEntryCreate(BaseModel):
    """Everything an audit entry carries except its id and timestamp."""

    user_id: str = Field(..., min_length=1)
    user_name: str
    action: AuditAction
    entity_type: str = Field(..., min_length=1)
    entity_id: str = Field(..., min_length=1)
    description: str
    before: dict[str, Any] | None = None
    after: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None

"""Domain entity — a member of the global staff list."""

from dataclasses import dataclass

from boatrecords.domain.entities.base import Entity


@dataclass(kw_only=True)
class StaffMember(Entity):
    """Names only: no roles, permissions or scheduling."""

    name: str
    label: str | None = None  # role hint, e.g. "Electrician"
    is_active: bool = True
    notes: str | None = None

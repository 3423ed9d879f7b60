"""Pydantic DTOs for the Project feature."""

from pydantic import BaseModel, Field

from boatrecords.domain.entities import ProjectType, PropulsionType


class ProjectCreate(BaseModel):
    """Schema for creating a new project."""

    title: str = Field(..., min_length=1, max_length=200)
    type: ProjectType
    client_id: str = Field(..., min_length=1)
    propulsion_type: PropulsionType = PropulsionType.ELECTRIC
    boat_model_version_id: str | None = None
    is_internal: bool = False


class ProjectUpdate(BaseModel):
    """Schema for updating project header fields.

    Status and configuration have dedicated operations so their audit
    entries stay specific.
    """

    title: str | None = Field(None, min_length=1, max_length=200)
    client_id: str | None = None
    is_internal: bool | None = None


"""Pydantic DTOs for the global staff list."""

from pydantic import BaseModel, Field, field_validator


def _strip_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    label: str | None = Field(None, max_length=100)
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("label", "notes")
    @classmethod
    def strip_optional(cls, value: str | None) -> str | None:
        return _strip_or_none(value)


class StaffUpdate(BaseModel):
    """Unset fields are left alone; an explicit None clears label/notes."""

    name: str | None = Field(None, min_length=1, max_length=200)
    label: str | None = Field(None, max_length=100)
    notes: str | None = None
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("label", "notes")
    @classmethod
    def strip_optional(cls, value: str | None) -> str | None:
        return _strip_or_none(value)

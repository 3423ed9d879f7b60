"""Pydantic DTOs (Data Transfer Objects) for the Client feature."""

from pydantic import BaseModel, Field

from boatrecords.domain.entities import ClientStatus, ClientType


class ClientCreate(BaseModel):
    """Schema for creating a new client."""

    name: str = Field(..., min_length=1, max_length=200, examples=["Van Dijk Marine B.V."])
    type: ClientType
    country: str = Field(..., min_length=1, max_length=100, examples=["NL"])
    status: ClientStatus = ClientStatus.ACTIVE
    email: str | None = None
    phone: str | None = None
    street: str | None = None
    postal_code: str | None = None
    city: str | None = None
    vat_number: str | None = None
    kvk_number: str | None = None
    contact_person: str | None = None


class ClientUpdate(BaseModel):
    """Schema for updating a client. Only fields that are set are applied."""

    name: str | None = Field(None, min_length=1, max_length=200)
    type: ClientType | None = None
    country: str | None = None
    status: ClientStatus | None = None
    email: str | None = None
    phone: str | None = None
    street: str | None = None
    postal_code: str | None = None
    city: str | None = None
    vat_number: str | None = None
    kvk_number: str | None = None
    contact_person: str | None = None

"""Domain entity — a customer of the yard."""

from dataclasses import dataclass
from enum import Enum

from boatrecords.domain.entities.base import Archivable, Entity


class ClientType(str, Enum):
    COMPANY = "company"
    PRIVATE = "private"


class ClientStatus(str, Enum):
    ACTIVE = "active"
    PROSPECT = "prospect"
    INACTIVE = "inactive"


@dataclass(kw_only=True)
class Client(Archivable, Entity):
    client_number: str
    name: str
    type: ClientType
    country: str
    status: ClientStatus = ClientStatus.ACTIVE

    email: str | None = None
    phone: str | None = None

    street: str | None = None
    postal_code: str | None = None
    city: str | None = None

    # Company registration details
    vat_number: str | None = None
    kvk_number: str | None = None
    contact_person: str | None = None

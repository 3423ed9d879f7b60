"""Client repository: customers of the yard, archived rather than deleted."""

from boatrecords.application.interfaces import OrderBy, QueryFilter
from boatrecords.application.namespaces import CLIENTS
from boatrecords.application.repositories.base import BaseRepository, next_number, set_fields
from boatrecords.application.schemas.client import ClientCreate, ClientUpdate
from boatrecords.domain.entities import AuditContext, Client, ClientStatus, new_id, utc_now

CLIENT_NUMBER_PREFIX = "CLI"


class ClientRepository(BaseRepository[Client]):
    namespace = CLIENTS
    entity_label = "Client"

    async def get_active(self) -> list[Client]:
        """Active, non-archived clients sorted by name."""
        return await self.query(
            QueryFilter(
                where={"status": ClientStatus.ACTIVE, "archived_at": None},
                order_by=OrderBy("name"),
            )
        )

    async def get_by_number(self, client_number: str) -> Client | None:
        matches = await self.query(
            QueryFilter(where={"client_number": client_number}, limit=1)
        )
        return matches[0] if matches else None

    async def search(self, term: str) -> list[Client]:
        """Case-insensitive match on name, email or client number."""
        needle = term.strip().lower()
        clients = await self.get_all()
        if not needle:
            return clients
        return [
            client
            for client in clients
            if needle in client.name.lower()
            or needle in (client.email or "").lower()
            or needle in client.client_number.lower()
        ]

    async def create(self, data: ClientCreate, context: AuditContext) -> Client:
        existing = await self.get_all()
        now = utc_now()
        client = Client(
            id=new_id(),
            created_at=now,
            updated_at=now,
            version=1,
            client_number=next_number(
                CLIENT_NUMBER_PREFIX, [c.client_number for c in existing]
            ),
            **data.model_dump(),
        )
        return await self._insert(client, context)

    async def update(
        self, client_id: str, data: ClientUpdate, context: AuditContext
    ) -> Client:
        client = await self.require(client_id)
        return await self._apply_update(client, set_fields(data), context)

    async def archive(
        self, client_id: str, reason: str, context: AuditContext
    ) -> Client:
        client = await self.require(client_id)
        client.status = ClientStatus.INACTIVE
        client.archived_at = utc_now()
        client.archived_by = context.user_id
        client.archive_reason = reason
        client.touch()
        await self._adapter.save(self.namespace, client)
        await self._audit.log_archive(context, self.entity_label, client.id, reason)
        return client

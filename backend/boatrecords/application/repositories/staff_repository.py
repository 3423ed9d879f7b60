"""Staff repository: the global list of people who can be assigned work."""

from boatrecords.application.interfaces import QueryFilter
from boatrecords.application.namespaces import STAFF
from boatrecords.application.repositories.base import BaseRepository, set_fields
from boatrecords.application.schemas.staff import StaffCreate, StaffUpdate
from boatrecords.domain.entities import AuditContext, StaffMember, new_id, utc_now


def _by_name(members: list[StaffMember]) -> list[StaffMember]:
    return sorted(members, key=lambda m: m.name.casefold())


class StaffRepository(BaseRepository[StaffMember]):
    namespace = STAFF
    entity_label = "StaffMember"

    async def get_all(self) -> list[StaffMember]:
        return _by_name(await super().get_all())

    async def get_active(self) -> list[StaffMember]:
        return _by_name(await self.query(QueryFilter(where={"is_active": True})))

    async def find_by_name(self, name: str) -> StaffMember | None:
        """Exact, case-insensitive name lookup."""
        wanted = name.strip().casefold()
        for member in await super().get_all():
            if member.name.casefold() == wanted:
                return member
        return None

    async def search(self, term: str) -> list[StaffMember]:
        needle = term.strip().casefold()
        members = await self.get_all()
        if not needle:
            return members
        return [
            m
            for m in members
            if needle in m.name.casefold() or needle in (m.label or "").casefold()
        ]

    async def create(self, data: StaffCreate, context: AuditContext) -> StaffMember:
        now = utc_now()
        member = StaffMember(
            id=new_id(), created_at=now, updated_at=now, version=1, **data.model_dump()
        )
        return await self._insert(member, context)

    async def update(
        self, member_id: str, data: StaffUpdate, context: AuditContext
    ) -> StaffMember:
        member = await self.require(member_id)
        return await self._apply_update(member, set_fields(data), context)

    async def deactivate(self, member_id: str, context: AuditContext) -> StaffMember:
        member = await self.require(member_id)
        return await self._apply_update(member, {"is_active": False}, context)

    async def reactivate(self, member_id: str, context: AuditContext) -> StaffMember:
        member = await self.require(member_id)
        return await self._apply_update(member, {"is_active": True}, context)

    async def delete(self, member_id: str, context: AuditContext) -> bool:
        return await self._hard_delete(member_id, context)

"""Timesheet repository: hours booked per user and project."""

import datetime

from boatrecords.application.interfaces import OrderBy, QueryFilter, SortDirection
from boatrecords.application.namespaces import TIMESHEETS
from boatrecords.application.repositories.base import BaseRepository, set_fields
from boatrecords.application.schemas.timesheet import TimesheetEntryCreate, TimesheetEntryUpdate
from boatrecords.domain.entities import AuditContext, TimesheetEntry, new_id, utc_now

_LATEST_DATE_FIRST = OrderBy("date", SortDirection.DESC)


class TimesheetRepository(BaseRepository[TimesheetEntry]):
    namespace = TIMESHEETS
    entity_label = "TimesheetEntry"

    async def get_by_user(self, user_id: str) -> list[TimesheetEntry]:
        return await self.query(
            QueryFilter(where={"user_id": user_id}, order_by=_LATEST_DATE_FIRST)
        )

    async def get_by_project(self, project_id: str) -> list[TimesheetEntry]:
        return await self.query(
            QueryFilter(where={"project_id": project_id}, order_by=_LATEST_DATE_FIRST)
        )

    async def get_by_date_range(
        self,
        start: datetime.date,
        end: datetime.date,
        user_id: str | None = None,
    ) -> list[TimesheetEntry]:
        """Entries with ``start <= date <= end``, oldest first."""
        where = {"user_id": user_id} if user_id is not None else {}
        entries = await self.query(QueryFilter(where=where, order_by=OrderBy("date")))
        return [e for e in entries if start <= e.date <= end]

    async def get_total_hours(
        self, project_id: str, *, billable_only: bool = False
    ) -> float:
        entries = await self.get_by_project(project_id)
        return sum(e.hours for e in entries if e.billable or not billable_only)

    async def create(
        self, data: TimesheetEntryCreate, context: AuditContext
    ) -> TimesheetEntry:
        """Book hours for the acting user."""
        now = utc_now()
        entry = TimesheetEntry(
            id=new_id(),
            created_at=now,
            updated_at=now,
            version=1,
            user_id=context.user_id,
            user_name=context.user_name,
            created_by=context.user_id,
            date=data.date,
            hours=data.hours,
            project_id=data.project_id,
            task_id=data.task_id,
            billable=data.billable,
            billing_rate=data.billing_rate if data.billable else None,
            note=data.note,
        )
        return await self._insert(entry, context)

    async def update(
        self, entry_id: str, data: TimesheetEntryUpdate, context: AuditContext
    ) -> TimesheetEntry:
        entry = await self.require(entry_id)
        changes = set_fields(data)
        billable = changes.get("billable")
        if billable is None:
            billable = entry.billable
        if not billable:
            changes["billing_rate"] = None
        changes["updated_by"] = context.user_id
        return await self._apply_update(entry, changes, context)

    async def delete(self, entry_id: str, context: AuditContext) -> bool:
        return await self._hard_delete(entry_id, context)

    async def delete_all(self, context: AuditContext) -> int:
        """Remove every entry, auditing each deletion. Returns how many went."""
        entries = await self.get_all()
        for entry in entries:
            await self._hard_delete(entry.id, context)
        return len(entries)

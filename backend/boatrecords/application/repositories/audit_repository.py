"""Append-only audit ledger repository.

There is no update or single-delete path. ``clear_for_testing``
wipes the namespace and exists for fixtures only.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

from boatrecords.application.interfaces import (
    OrderBy,
    PersistenceAdapter,
    QueryFilter,
    SortDirection,
)
from boatrecords.application.namespaces import AUDIT
from boatrecords.application.schemas.audit import AuditEntryCreate
from boatrecords.domain.entities import AuditEntry, new_id, utc_now

logger = logging.getLogger(__name__)

_NEWEST_FIRST = OrderBy("timestamp", SortDirection.DESC)
_TICK = timedelta(microseconds=1)


class AuditRepository:
    """Persists audit entries through the same adapter as every other type."""

    def __init__(
        self,
        adapter: PersistenceAdapter,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._adapter = adapter
        self._clock = clock
        self._last_timestamp: datetime | None = None

    def _next_timestamp(self) -> datetime:
        # Strictly increasing so newest-first ordering is total.
        timestamp = self._clock()
        if self._last_timestamp is not None and timestamp <= self._last_timestamp:
            timestamp = self._last_timestamp + _TICK
        self._last_timestamp = timestamp
        return timestamp

    async def create(self, data: AuditEntryCreate) -> AuditEntry:
        timestamp = self._next_timestamp()
        entry = AuditEntry(
            id=new_id(),
            timestamp=timestamp,
            created_at=timestamp,
            updated_at=timestamp,
            version=1,
            user_id=data.user_id,
            user_name=data.user_name,
            action=data.action,
            entity_type=data.entity_type,
            entity_id=data.entity_id,
            description=data.description,
            before=data.before,
            after=data.after,
            metadata=data.metadata,
        )
        await self._adapter.save(AUDIT, entry)
        logger.debug(
            "Audit %s %s/%s by %s", entry.action.value, entry.entity_type, entry.entity_id, entry.user_id
        )
        return entry

    async def get_by_id(self, entry_id: str) -> AuditEntry | None:
        return await self._adapter.get_by_id(AUDIT, entry_id)

    async def get_all(self) -> list[AuditEntry]:
        return await self._adapter.get_all(AUDIT)

    async def get_by_entity(self, entity_type: str, entity_id: str) -> list[AuditEntry]:
        return await self._adapter.query(
            AUDIT,
            QueryFilter(
                where={"entity_type": entity_type, "entity_id": entity_id},
                order_by=_NEWEST_FIRST,
            ),
        )

    async def get_by_user(self, user_id: str) -> list[AuditEntry]:
        return await self._adapter.query(
            AUDIT, QueryFilter(where={"user_id": user_id}, order_by=_NEWEST_FIRST)
        )

    async def get_recent(self, limit: int = 50) -> list[AuditEntry]:
        return await self._adapter.query(
            AUDIT, QueryFilter(order_by=_NEWEST_FIRST, limit=limit)
        )

    async def query(self, query_filter: QueryFilter) -> list[AuditEntry]:
        return await self._adapter.query(AUDIT, query_filter)

    async def count(self) -> int:
        return await self._adapter.count(AUDIT)

    async def import_entries(self, entries: Sequence[AuditEntry]) -> int:
        """Append entries from a backup whose ids are not in the ledger yet.

        Existing entries are never touched.
        """
        known = {entry.id for entry in await self._adapter.get_all(AUDIT)}
        fresh: list[AuditEntry] = []
        for entry in entries:
            if entry.id not in known:
                known.add(entry.id)
                fresh.append(entry)
        if fresh:
            await self._adapter.save_many(AUDIT, fresh)
        return len(fresh)

    async def clear_for_testing(self) -> None:
        """Bulk reset for test fixtures. Never called by product code."""
        logger.warning("Clearing the audit ledger")
        await self._adapter.clear(AUDIT)

"""Shared repository plumbing over the persistence port."""

import logging
import types
from collections.abc import Sequence
from functools import lru_cache
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Generic,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel

from boatrecords.application.interfaces import Namespace, PersistenceAdapter, QueryFilter
from boatrecords.application.serialization import snapshot
from boatrecords.domain.entities import AuditContext, Entity, generate_number, utc_now
from boatrecords.domain.exceptions import EntityNotFoundError

if TYPE_CHECKING:
    from boatrecords.application.services.audit_service import AuditService

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


def set_fields(data: BaseModel) -> dict[str, Any]:
    """The fields a partial-update DTO actually carries, as attribute values."""
    return {name: getattr(data, name) for name in data.model_fields_set}


@lru_cache(maxsize=None)
def _nullable_fields(entity_type: type) -> frozenset[str]:
    nullable = set()
    for name, hint in get_type_hints(entity_type).items():
        if get_origin(hint) in (Union, types.UnionType) and type(None) in get_args(hint):
            nullable.add(name)
    return frozenset(nullable)


def next_number(prefix: str, existing: Sequence[str]) -> str:
    """Next ``PREFIX-YYYY-NNNN`` business number for the current year."""
    year = utc_now().year
    stem = f"{prefix}-{year}-"
    sequences = [
        int(number[len(stem):])
        for number in existing
        if number.startswith(stem) and number[len(stem):].isdigit()
    ]
    return generate_number(prefix, max(sequences, default=0) + 1, year)


class BaseRepository(Generic[E]):
    """Typed access to one namespace plus audited write helpers.

    Subclasses set ``namespace`` and ``entity_label`` (the name used in
    audit entries and error messages).
    """

    namespace: ClassVar[Namespace]
    entity_label: ClassVar[str]

    def __init__(self, adapter: PersistenceAdapter, audit: "AuditService"):
        self._adapter = adapter
        self._audit = audit

    # ── Reads ────────────────────────────────────────────────────────

    async def get_by_id(self, entity_id: str) -> E | None:
        return await self._adapter.get_by_id(self.namespace, entity_id)

    async def get_all(self) -> list[E]:
        return await self._adapter.get_all(self.namespace)

    async def query(self, query_filter: QueryFilter) -> list[E]:
        return await self._adapter.query(self.namespace, query_filter)

    async def count(self, query_filter: QueryFilter | None = None) -> int:
        return await self._adapter.count(self.namespace, query_filter)

    async def require(self, entity_id: str) -> E:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(self.entity_label, entity_id)
        return entity

    # ── Audited writes ───────────────────────────────────────────────

    async def _insert(self, entity: E, context: AuditContext) -> E:
        await self._adapter.save(self.namespace, entity)
        await self._audit.log_create(context, self.entity_label, entity.id, snapshot(entity))
        return entity

    async def _apply_update(
        self, entity: E, changes: dict[str, Any], context: AuditContext
    ) -> E:
        before = snapshot(entity)
        nullable = _nullable_fields(type(entity))
        for name, value in changes.items():
            # An explicit None only clears optional fields.
            if value is None and name not in nullable:
                continue
            setattr(entity, name, value)
        entity.touch()
        await self._adapter.save(self.namespace, entity)
        await self._audit.log_update(
            context, self.entity_label, entity.id, before, snapshot(entity)
        )
        return entity

    async def _hard_delete(self, entity_id: str, context: AuditContext) -> bool:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self._adapter.delete(self.namespace, entity_id)
        await self._audit.log_delete(context, self.entity_label, entity_id, snapshot(entity))
        return True

    # ── Backup restore ───────────────────────────────────────────────

    async def import_entities(self, entities: Sequence[E], context: AuditContext) -> int:
        """Merge records from a backup.

        A record is written when its id is unknown or its version is
        strictly newer than the stored one and than any earlier copy of the
        same id in the batch; everything else is skipped.
        Returns the number of records written.
        """
        stored = {entity.id: entity for entity in await self.get_all()}
        # One write per id: the highest version seen in the batch wins.
        winners: dict[str, E] = {}
        for entity in entities:
            current = winners.get(entity.id) or stored.get(entity.id)
            if current is None or entity.version > current.version:
                winners[entity.id] = entity
        accepted = list(winners.values())
        if accepted:
            await self._adapter.save_many(self.namespace, accepted)
        skipped = len(entities) - len(accepted)
        logger.info(
            "Imported %d %s record(s), skipped %d", len(accepted), self.entity_label, skipped
        )
        if accepted:
            await self._audit.log_import(context, self.entity_label, len(accepted), skipped)
        return len(accepted)

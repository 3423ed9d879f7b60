"""Namespace-partitioned store implementing the PersistenceAdapter port.

Each namespace is one blob on the medium: a JSON array of every record in
that namespace. Mutations load the whole array, change it, and write it back
as one unit. That makes writes O(n) in namespace size but atomic per
namespace: a reader never sees a half-written array.

There is no lock between the load and the write of one mutation. Two callers
interleaving at those suspension points can both read the same state and the
later write silently discards the earlier one (lost update). The version
check narrows that window; it does not close it, and records at version 0
bypass it unless ``strict_versioning`` is on.
"""

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar
from uuid import uuid4

from boatrecords.application.interfaces import (
    Namespace,
    PersistenceAdapter,
    QueryFilter,
    Transaction,
)
from boatrecords.application.serialization import from_document, to_documents
from boatrecords.domain.entities import Entity
from boatrecords.domain.exceptions import ConflictError
from boatrecords.infrastructure.persistence.media import KeyValueMedium
from boatrecords.infrastructure.persistence.query_engine import evaluate

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)
R = TypeVar("R")

DEFAULT_KEY_PREFIX = "boatrecords_v4_"


class KeyValueStoreAdapter(PersistenceAdapter):
    """Implements the persistence port over any ``KeyValueMedium``."""

    def __init__(
        self,
        medium: KeyValueMedium,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        strict_versioning: bool = False,
    ):
        self._medium = medium
        self._key_prefix = key_prefix
        self._strict_versioning = strict_versioning

    @property
    def medium(self) -> KeyValueMedium:
        return self._medium

    def key_for(self, namespace: Namespace) -> str:
        return f"{self._key_prefix}{namespace.name}"

    # ── Load / persist (the only suspension points) ──────────────────

    async def _load(self, namespace: Namespace[E]) -> list[E]:
        if not self._medium.available:
            return []
        raw = await self._medium.read(self.key_for(namespace))
        if raw is None:
            return []
        return [from_document(namespace.entity_type, doc) for doc in json.loads(raw)]

    async def _persist(self, namespace: Namespace[E], entities: list[E]) -> None:
        payload = json.dumps(to_documents(entities))
        await self._medium.write(self.key_for(namespace), payload)

    # ── Optimistic concurrency ───────────────────────────────────────

    def _check_version(self, stored: Entity, incoming: Entity) -> None:
        if self._strict_versioning:
            rejected = incoming.version <= stored.version
        else:
            # Either side at version 0 is accepted unconditionally.
            rejected = (
                incoming.version > 0
                and stored.version > 0
                and incoming.version <= stored.version
            )
        if rejected:
            raise ConflictError(incoming.id, stored.version, incoming.version)

    def _upsert(self, entities: list[E], entity: E) -> None:
        for index, existing in enumerate(entities):
            if existing.id == entity.id:
                self._check_version(existing, entity)
                entities[index] = entity
                return
        entities.append(entity)

    @staticmethod
    def _check_type(namespace: Namespace, entity: Entity) -> None:
        if not isinstance(entity, namespace.entity_type):
            raise TypeError(
                f"Namespace '{namespace.name}' holds {namespace.entity_type.__name__}, "
                f"got {type(entity).__name__}"
            )

    # ── Port implementation ──────────────────────────────────────────

    async def save(self, namespace: Namespace[E], entity: E) -> None:
        self._check_type(namespace, entity)
        if not self._medium.available:
            logger.debug("Storage unavailable; skipped save of %s/%s", namespace.name, entity.id)
            return
        entities = await self._load(namespace)
        self._upsert(entities, entity)
        await self._persist(namespace, entities)

    async def get_by_id(self, namespace: Namespace[E], entity_id: str) -> E | None:
        for entity in await self._load(namespace):
            if entity.id == entity_id:
                return entity
        return None

    async def get_all(self, namespace: Namespace[E]) -> list[E]:
        return await self._load(namespace)

    async def query(self, namespace: Namespace[E], query_filter: QueryFilter) -> list[E]:
        entities = await self._load(namespace)
        return evaluate(entities, namespace.entity_type, query_filter)

    async def delete(self, namespace: Namespace[E], entity_id: str) -> None:
        if not self._medium.available:
            logger.debug("Storage unavailable; skipped delete of %s/%s", namespace.name, entity_id)
            return
        entities = await self._load(namespace)
        remaining = [e for e in entities if e.id != entity_id]
        if len(remaining) == len(entities):
            return
        await self._persist(namespace, remaining)

    async def save_many(self, namespace: Namespace[E], entities: Sequence[E]) -> None:
        """Apply every save in one load/persist round.

        A conflict on any entity aborts the batch before anything is written.
        """
        for entity in entities:
            self._check_type(namespace, entity)
        if not self._medium.available:
            logger.debug("Storage unavailable; skipped save of %d %s", len(entities), namespace.name)
            return
        stored = await self._load(namespace)
        for entity in entities:
            self._upsert(stored, entity)
        await self._persist(namespace, stored)

    async def transaction(self, fn: Callable[[Transaction], Awaitable[R]]) -> R:
        # Scoping only: the key-value store cannot roll back partial work.
        tx = Transaction(id=f"tx-{uuid4().hex}")
        logger.debug("Transaction %s started", tx.id)
        result = await fn(tx)
        logger.debug("Transaction %s finished", tx.id)
        return result

    async def clear(self, namespace: Namespace[E]) -> None:
        if not self._medium.available:
            return
        await self._medium.remove(self.key_for(namespace))
        logger.info("Cleared namespace '%s'", namespace.name)

    async def count(
        self, namespace: Namespace[E], query_filter: QueryFilter | None = None
    ) -> int:
        if query_filter is not None:
            return len(await self.query(namespace, query_filter))
        return len(await self._load(namespace))

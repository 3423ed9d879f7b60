"""Abstract persistence port: the seam a relational backend substitutes.

Repositories depend only on this contract, never on a concrete store, so
swapping the embedded key-value store for a transactional database does not
touch any repository code.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from boatrecords.domain.entities import Entity

E = TypeVar("E", bound=Entity)
R = TypeVar("R")


@dataclass(frozen=True)
class Namespace(Generic[E]):
    """An isolated partition holding every record of one entity type."""

    name: str
    entity_type: type[E]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class OrderBy:
    field: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class QueryFilter:
    """Filter, ordering and page window for a single-namespace query.

    ``where`` maps field names to a value (equality), a list/tuple/set of
    values (membership) or ``None`` (field must be absent).
    """

    where: dict[str, Any] = field(default_factory=dict)
    order_by: OrderBy | None = None
    limit: int | None = None
    offset: int = 0


@dataclass(frozen=True)
class Transaction:
    """Opaque handle passed to transaction callbacks."""

    id: str


class PersistenceAdapter(ABC):
    """Port — the capability set every storage backend provides."""

    @abstractmethod
    async def save(self, namespace: Namespace[E], entity: E) -> None:
        """Create or update an entity.

        Raises:
            ConflictError: If the optimistic version check fails.
        """
        ...

    @abstractmethod
    async def get_by_id(self, namespace: Namespace[E], entity_id: str) -> E | None:
        """Retrieve a single entity, or None when absent."""
        ...

    @abstractmethod
    async def get_all(self, namespace: Namespace[E]) -> list[E]:
        """Retrieve every entity in the namespace, in stored order."""
        ...

    @abstractmethod
    async def query(self, namespace: Namespace[E], query_filter: QueryFilter) -> list[E]:
        """Retrieve the entities matching a filter."""
        ...

    @abstractmethod
    async def delete(self, namespace: Namespace[E], entity_id: str) -> None:
        """Remove an entity. Removing an unknown id is a no-op."""
        ...

    @abstractmethod
    async def save_many(self, namespace: Namespace[E], entities: Sequence[E]) -> None:
        """Save several entities of one namespace."""
        ...

    @abstractmethod
    async def transaction(self, fn: Callable[[Transaction], Awaitable[R]]) -> R:
        """Run ``fn`` inside a transaction scope and return its result.

        Backends without real transactions only scope the call: partial
        work is not rolled back when ``fn`` raises.
        """
        ...

    @abstractmethod
    async def clear(self, namespace: Namespace[E]) -> None:
        """Drop every entity in the namespace (fixtures and resets only)."""
        ...

    @abstractmethod
    async def count(
        self, namespace: Namespace[E], query_filter: QueryFilter | None = None
    ) -> int:
        """Count the entities in the namespace, optionally filtered."""
        ...

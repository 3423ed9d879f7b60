"""Key-value media: where namespace blobs physically live.

The store adapter reads and writes one text blob per namespace key. Media
only move those blobs; they know nothing about entities or versions.
"""

import asyncio
from abc import ABC, abstractmethod


class KeyValueMedium(ABC):
    """A keyed blob store. ``read`` and ``write`` are the suspension points."""

    @property
    def available(self) -> bool:
        """False when no storage exists in the current execution context."""
        return True

    @abstractmethod
    async def read(self, key: str) -> str | None: ...

    @abstractmethod
    async def write(self, key: str, payload: str) -> None: ...

    @abstractmethod
    async def remove(self, key: str) -> None: ...

    async def keys(self) -> list[str]:
        return []


class InMemoryMedium(KeyValueMedium):
    """Process-local medium for tests and scratch sessions."""

    def __init__(self) -> None:
        self._blobs: dict[str, str] = {}

    async def read(self, key: str) -> str | None:
        await asyncio.sleep(0)
        return self._blobs.get(key)

    async def write(self, key: str, payload: str) -> None:
        await asyncio.sleep(0)
        self._blobs[key] = payload

    async def remove(self, key: str) -> None:
        await asyncio.sleep(0)
        self._blobs.pop(key, None)

    async def keys(self) -> list[str]:
        return sorted(self._blobs)


class UnavailableMedium(KeyValueMedium):
    """Stands in where no storage exists; the adapter degrades around it."""

    @property
    def available(self) -> bool:
        return False

    async def read(self, key: str) -> str | None:
        return None

    async def write(self, key: str, payload: str) -> None:
        return None

    async def remove(self, key: str) -> None:
        return None

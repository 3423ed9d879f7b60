"""Base contract every stored record satisfies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


@dataclass(kw_only=True)
class Entity:
    """Identity, timestamps and the optimistic-concurrency counter.

    ``version`` must grow by exactly one on every successful mutation made
    through a repository; ``id`` and ``created_at`` never change.
    """

    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    version: int = 0

    def touch(self) -> None:
        """Stamp a mutation: refresh updated_at and bump the version."""
        self.updated_at = utc_now()
        self.version += 1


@dataclass(kw_only=True)
class Archivable:
    """Soft-archive marker fields shared by clients and projects."""

    archived_at: datetime | None = None
    archived_by: str | None = None
    archive_reason: str | None = None

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None


def generate_number(prefix: str, sequence: int, year: int | None = None) -> str:
    """Business number such as ``CLI-2026-0001``."""
    year = year if year is not None else utc_now().year
    return f"{prefix}-{year}-{sequence:04d}"

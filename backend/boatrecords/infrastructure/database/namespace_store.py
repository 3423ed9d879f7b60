"""Key-value medium backed by a SQL table through SQLAlchemy async sessions."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from boatrecords.domain.exceptions import StorageIOError
from boatrecords.infrastructure.database.base import Base
from boatrecords.infrastructure.database.models import NamespaceRecordModel
from boatrecords.infrastructure.persistence.media import KeyValueMedium

logger = logging.getLogger(__name__)


async def create_schema(engine: AsyncEngine) -> None:
    """Create the namespace table if it does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.debug("Namespace table ready")


class SQLAlchemyMedium(KeyValueMedium):
    """Stores each namespace blob as one row of ``namespace_records``.

    Every write runs in its own short transaction, so a namespace row is
    replaced as a whole or not at all. Driver errors surface as
    ``StorageIOError`` rather than degrading silently.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def read(self, key: str) -> str | None:
        try:
            async with self._session_factory() as session:
                model = await session.get(NamespaceRecordModel, key)
                return model.payload if model is not None else None
        except SQLAlchemyError as exc:
            raise StorageIOError(key, "read", str(exc)) from exc

    async def write(self, key: str, payload: str) -> None:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    model = await session.get(NamespaceRecordModel, key)
                    if model is None:
                        session.add(NamespaceRecordModel(key=key, payload=payload))
                    else:
                        model.payload = payload
        except SQLAlchemyError as exc:
            raise StorageIOError(key, "write", str(exc)) from exc

    async def remove(self, key: str) -> None:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        delete(NamespaceRecordModel).where(NamespaceRecordModel.key == key)
                    )
        except SQLAlchemyError as exc:
            raise StorageIOError(key, "remove", str(exc)) from exc

    async def keys(self) -> list[str]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(NamespaceRecordModel.key).order_by(NamespaceRecordModel.key)
                )
                return list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise StorageIOError("*", "list", str(exc)) from exc

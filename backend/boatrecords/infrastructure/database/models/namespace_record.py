"""SQLAlchemy ORM model holding one namespace blob per row."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from boatrecords.infrastructure.database.base import Base


class NamespaceRecordModel(Base):
    """ORM model — maps to the 'namespace_records' table."""

    __tablename__ = "namespace_records"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<NamespaceRecordModel(key='{self.key}', bytes={len(self.payload)})>"

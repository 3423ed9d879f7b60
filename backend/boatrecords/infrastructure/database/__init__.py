from .base import Base
from .session import create_engine, create_session_factory
from .models import NamespaceRecordModel
from .namespace_store import SQLAlchemyMedium, create_schema

__all__ = [
    "Base",
    "create_engine",
    "create_session_factory",
    "NamespaceRecordModel",
    "SQLAlchemyMedium",
    "create_schema",
]

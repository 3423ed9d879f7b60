from .namespace_record import NamespaceRecordModel

__all__ = [
    "NamespaceRecordModel",
]

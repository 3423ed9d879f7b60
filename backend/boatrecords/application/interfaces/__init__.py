from .persistence_adapter import (
    Namespace,
    OrderBy,
    PersistenceAdapter,
    QueryFilter,
    SortDirection,
    Transaction,
)

__all__ = [
    "Namespace",
    "OrderBy",
    "PersistenceAdapter",
    "QueryFilter",
    "SortDirection",
    "Transaction",
]

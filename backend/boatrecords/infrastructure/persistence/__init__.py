from .key_value_adapter import DEFAULT_KEY_PREFIX, KeyValueStoreAdapter
from .media import InMemoryMedium, KeyValueMedium, UnavailableMedium

__all__ = [
    "DEFAULT_KEY_PREFIX",
    "KeyValueStoreAdapter",
    "InMemoryMedium",
    "KeyValueMedium",
    "UnavailableMedium",
]

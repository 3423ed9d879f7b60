"""Entity ↔ JSON-compatible document conversion.

Domain entities are plain dataclasses; pydantic ``TypeAdapter`` handles the
nested dataclasses, enums and datetimes in both directions.
"""

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter

from boatrecords.domain.entities import Entity

E = TypeVar("E", bound=Entity)


@lru_cache(maxsize=None)
def _adapter_for(entity_type: type) -> TypeAdapter:
    return TypeAdapter(entity_type)


def to_document(entity: Entity) -> dict[str, Any]:
    """Dump an entity to a dict of JSON-native values."""
    return _adapter_for(type(entity)).dump_python(entity, mode="json")


def from_document(entity_type: type[E], document: dict[str, Any]) -> E:
    """Rebuild a typed entity from a stored document."""
    return _adapter_for(entity_type).validate_python(document)


def to_documents(entities: list[Entity]) -> list[dict[str, Any]]:
    return [to_document(entity) for entity in entities]


def snapshot(entity: Entity) -> dict[str, Any]:
    """Opaque before/after payload for audit entries."""
    return to_document(entity)

"""In-memory filter / sort / paginate evaluation over one loaded namespace.

A ``QueryFilter`` is compiled into a small predicate tree checked against the
namespace's record type, so a misspelt field fails loudly instead of quietly
matching nothing.
"""

import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from boatrecords.application.interfaces import OrderBy, QueryFilter, SortDirection
from boatrecords.domain.entities import Entity
from boatrecords.domain.exceptions import InvalidQueryError

E = TypeVar("E", bound=Entity)

_MEMBERSHIP_TYPES = (list, tuple, set, frozenset)


class Predicate(ABC):
    @abstractmethod
    def matches(self, record: Any) -> bool: ...


@dataclass(frozen=True)
class FieldEquals(Predicate):
    field: str
    value: Any

    def matches(self, record: Any) -> bool:
        return getattr(record, self.field) == self.value


@dataclass(frozen=True)
class FieldIn(Predicate):
    field: str
    values: tuple[Any, ...]

    def matches(self, record: Any) -> bool:
        return getattr(record, self.field) in self.values


@dataclass(frozen=True)
class FieldIsNull(Predicate):
    field: str

    def matches(self, record: Any) -> bool:
        return getattr(record, self.field) is None


@dataclass(frozen=True)
class AllOf(Predicate):
    predicates: tuple[Predicate, ...]

    def matches(self, record: Any) -> bool:
        return all(p.matches(record) for p in self.predicates)


def field_names(entity_type: type) -> frozenset[str]:
    return frozenset(f.name for f in dataclasses.fields(entity_type))


def compile_where(entity_type: type, where: dict[str, Any]) -> Predicate:
    known = field_names(entity_type)
    predicates: list[Predicate] = []
    for name, value in where.items():
        if name not in known:
            raise InvalidQueryError(
                f"{entity_type.__name__} has no field '{name}'"
            )
        if value is None:
            predicates.append(FieldIsNull(name))
        elif isinstance(value, _MEMBERSHIP_TYPES):
            predicates.append(FieldIn(name, tuple(value)))
        else:
            predicates.append(FieldEquals(name, value))
    return AllOf(tuple(predicates))


def order_records(records: list[E], order_by: OrderBy, entity_type: type) -> list[E]:
    """Stable sort on one field; missing values go last ascending, first descending."""
    if order_by.field not in field_names(entity_type):
        raise InvalidQueryError(
            f"{entity_type.__name__} has no field '{order_by.field}'"
        )
    name = order_by.field
    descending = SortDirection(order_by.direction) == SortDirection.DESC

    present = [r for r in records if getattr(r, name) is not None]
    missing = [r for r in records if getattr(r, name) is None]
    present.sort(key=lambda r: getattr(r, name), reverse=descending)

    if descending:
        return missing + present
    return present + missing


def paginate(records: list[E], offset: int, limit: int | None) -> list[E]:
    if offset < 0:
        raise InvalidQueryError(f"offset must be >= 0, got {offset}")
    if limit is not None and limit < 0:
        raise InvalidQueryError(f"limit must be >= 0, got {limit}")
    # offset strictly before limit
    window = records[offset:]
    if limit is not None:
        window = window[:limit]
    return window


def evaluate(
    records: Sequence[E], entity_type: type, query_filter: QueryFilter
) -> list[E]:
    """Apply where → order_by → offset → limit to an already-loaded sequence."""
    result = list(records)

    if query_filter.where:
        predicate = compile_where(entity_type, query_filter.where)
        result = [r for r in result if predicate.matches(r)]

    if query_filter.order_by is not None:
        result = order_records(result, query_filter.order_by, entity_type)

    return paginate(result, query_filter.offset, query_filter.limit)

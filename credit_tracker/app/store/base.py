"""Collection-style contract between the core services and the persistent store.

Records travel as plain dictionaries keyed by column name. Related records
requested through ``include`` are nested under the relation name: a list for
one-to-many relations (``"payments"``), a dictionary for many-to-one
relations (``"provider"``, ``"week.month"``).

A missing record is a result, not an error: ``get`` and ``update`` return
``None`` and ``delete`` returns ``False``. Failures of the store itself are
raised as :class:`~credit_tracker.app.exceptions.StoreError`; constraint
rejections as :class:`~credit_tracker.app.exceptions.ConstraintViolation`.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

MONTHS = "months"
WEEKS = "weeks"
PROVIDERS = "providers"
PAYMENTS = "payments"

COLLECTIONS = frozenset({MONTHS, WEEKS, PROVIDERS, PAYMENTS})

FILTER_OPERATORS = frozenset({"eq", "gte", "lte", "ilike", "in"})

Record = dict[str, Any]


@dataclass(frozen=True)
class Filter:
    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in FILTER_OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op}")


@dataclass(frozen=True)
class Order:
    field: str
    descending: bool = False


def eq(field: str, value: Any) -> Filter:
    return Filter(field, "eq", value)


def gte(field: str, value: Any) -> Filter:
    return Filter(field, "gte", value)


def lte(field: str, value: Any) -> Filter:
    return Filter(field, "lte", value)


def ilike(field: str, term: str) -> Filter:
    """Case-insensitive substring match."""
    return Filter(field, "ilike", term)


def in_(field: str, values: Sequence[Any]) -> Filter:
    return Filter(field, "in", tuple(values))


def asc(field: str) -> Order:
    return Order(field)


def desc(field: str) -> Order:
    return Order(field, descending=True)


class Store(abc.ABC):
    """Read/write access to the ``months``, ``weeks``, ``providers`` and ``payments`` collections."""

    @abc.abstractmethod
    def get(
        self, collection: str, record_id: str, *, include: Sequence[str] = ()
    ) -> Optional[Record]:
        """Return one record or ``None`` when no record has that id."""

    @abc.abstractmethod
    def list(
        self,
        collection: str,
        *,
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
        include: Sequence[str] = (),
        limit: Optional[int] = None,
    ) -> list[Record]:
        """Return the matching records, related records included, in one call."""

    @abc.abstractmethod
    def count(self, collection: str, *, filters: Sequence[Filter] = ()) -> int:
        ...

    @abc.abstractmethod
    def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        """Persist a new record; the store assigns ``id`` and timestamps."""

    @abc.abstractmethod
    def update(
        self, collection: str, record_id: str, patch: Mapping[str, Any]
    ) -> Optional[Record]:
        """Apply ``patch`` and return the stored record, or ``None`` when missing."""

    @abc.abstractmethod
    def delete(self, collection: str, record_id: str) -> bool:
        """Remove a record; ``False`` when it did not exist."""

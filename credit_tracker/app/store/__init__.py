"""Store interface and the SQLAlchemy implementation."""

from .base import (
    COLLECTIONS,
    MONTHS,
    PAYMENTS,
    PROVIDERS,
    WEEKS,
    Filter,
    Order,
    Record,
    Store,
    asc,
    desc,
    eq,
    gte,
    ilike,
    in_,
    lte,
)
from .sql_store import SqlAlchemyStore

__all__ = [
    "COLLECTIONS",
    "MONTHS",
    "PAYMENTS",
    "PROVIDERS",
    "WEEKS",
    "Filter",
    "Order",
    "Record",
    "SqlAlchemyStore",
    "Store",
    "asc",
    "desc",
    "eq",
    "gte",
    "ilike",
    "in_",
    "lte",
]

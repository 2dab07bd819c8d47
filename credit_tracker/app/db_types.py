"""Custom SQLAlchemy column types shared by the credit tracker tables."""

from __future__ import annotations

import uuid
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy.dialects import postgresql
from sqlalchemy.types import CHAR, Numeric, TypeDecorator

CENTS = Decimal("0.01")


class GUID(TypeDecorator):
    """UUID primary and foreign keys.

    Native ``UUID`` on PostgreSQL, ``CHAR(36)`` elsewhere. Values always come
    back as strings so records look the same whatever the backing engine.
    """

    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return value
        parsed = value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
        if dialect.name == "postgresql":
            return parsed
        return str(parsed)

    def process_result_value(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return value
        return str(value)


class Money(TypeDecorator):
    """Two-decimal currency column.

    SQLite has no fixed-point storage, so values are quantized to cents on the
    way in and on the way out to keep sums free of binary rounding drift.
    """

    impl = Numeric(12, 2)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return value
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)

    def process_result_value(self, value: Any, dialect):  # type: ignore[override]
        if value is None:
            return value
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)

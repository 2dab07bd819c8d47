"""Shared schema definitions."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Annotated, Generic, Sequence, TypeVar

from pydantic import AfterValidator, BaseModel, Field

T = TypeVar("T")

MAX_PAYMENT_AMOUNT = Decimal("999999.99")


def _normalize_uuid(value: str) -> str:
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError) as exc:
        raise ValueError("Invalid identifier, expected a UUID") from exc


EntityId = Annotated[str, AfterValidator(_normalize_uuid)]


class ListResponse(BaseModel, Generic[T]):
    """Standard shape for listings."""

    items: Sequence[T]
    total: int = Field(..., ge=0)

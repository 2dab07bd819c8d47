"""Business logic for months."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from .. import mappers, schemas
from ..exceptions import NotFoundError
from ..models.timestamps import utcnow
from ..store import MONTHS, Store, asc, desc
from ..validation import EntityKind, validate
from .reconciliation import ReconciliationService

LOGGER = logging.getLogger(__name__)

Payload = Union[Mapping[str, Any], BaseModel]


class MonthService:
    """CRUD operations for months."""

    @staticmethod
    def list_months(store: Store) -> list[schemas.MonthRead]:
        records = store.list(MONTHS, order=[desc("year"), asc("name")])
        return mappers.to_models(schemas.MonthRead, records)

    @staticmethod
    def get_month(store: Store, month_id: str) -> Optional[schemas.MonthRead]:
        record = store.get(MONTHS, month_id)
        return mappers.to_month(record) if record is not None else None

    @classmethod
    def require_month(
        cls, store: Store, month_id: str, *, field: Optional[str] = None
    ) -> schemas.MonthRead:
        month = cls.get_month(store, month_id)
        if month is None:
            raise NotFoundError("month", month_id, field=field)
        return month

    @staticmethod
    def create_month(store: Store, payload: Payload) -> schemas.MonthRead:
        data = validate(EntityKind.MONTH, payload).unwrap()
        month = mappers.to_month(store.insert(MONTHS, data))
        LOGGER.info("Created month %s (%s %s)", month.id, month.name, month.year)
        return month

    @staticmethod
    def update_month(store: Store, month_id: str, payload: Payload) -> schemas.MonthRead:
        patch = validate(EntityKind.MONTH, payload, partial=True).unwrap()
        patch["updated_at"] = utcnow()
        record = store.update(MONTHS, month_id, patch)
        if record is None:
            raise NotFoundError("month", month_id)
        return mappers.to_month(record)

    @classmethod
    def delete_month(cls, store: Store, month_id: str) -> None:
        """Delete a month that has no weeks left."""

        cls.require_month(store, month_id)
        ReconciliationService.ensure_month_deletable(store, month_id)
        if not store.delete(MONTHS, month_id):
            raise NotFoundError("month", month_id)
        LOGGER.info("Deleted month %s", month_id)

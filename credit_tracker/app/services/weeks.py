"""Business logic for weeks."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from .. import aggregation, mappers, schemas
from ..exceptions import NotFoundError
from ..models.timestamps import utcnow
from ..store import PAYMENTS, WEEKS, Store, asc, eq
from ..validation import EntityKind, check_week_dates, validate
from .months import MonthService
from .reconciliation import ReconciliationService
from .sequencing import SequencingService
from .summaries import SummaryService

LOGGER = logging.getLogger(__name__)

Payload = Union[Mapping[str, Any], BaseModel]


class WeekService:
    """CRUD operations for weeks.

    None of the mutating methods touch the owning month's ``total_credit``;
    callers follow up with ``ReconciliationService.recalculate_month_total``.
    """

    @staticmethod
    def list_weeks(store: Store, month_id: str) -> list[schemas.WeekRead]:
        records = store.list(WEEKS, filters=[eq("month_id", month_id)], order=[asc("week_number")])
        return mappers.to_models(schemas.WeekRead, records)

    @staticmethod
    def list_weeks_with_payments(store: Store, month_id: str) -> list[schemas.WeekWithPayments]:
        records = store.list(
            WEEKS,
            filters=[eq("month_id", month_id)],
            order=[asc("week_number")],
            include=("payments.provider",),
        )
        return [mappers.to_week_with_payments(record) for record in records]

    @staticmethod
    def get_week(store: Store, week_id: str) -> Optional[schemas.WeekRead]:
        record = store.get(WEEKS, week_id)
        return mappers.to_week(record) if record is not None else None

    @classmethod
    def require_week(
        cls, store: Store, week_id: str, *, field: Optional[str] = None
    ) -> schemas.WeekRead:
        week = cls.get_week(store, week_id)
        if week is None:
            raise NotFoundError("week", week_id, field=field)
        return week

    @staticmethod
    def get_week_with_month(store: Store, week_id: str) -> Optional[schemas.WeekWithMonth]:
        record = store.get(WEEKS, week_id, include=("month",))
        if record is None:
            return None
        return mappers.to_model(schemas.WeekWithMonth, record)

    @staticmethod
    def next_week_number(store: Store, month_id: str) -> int:
        MonthService.require_month(store, month_id)
        return SequencingService.next_week_number(store, month_id)

    @staticmethod
    def create_week(store: Store, payload: Payload) -> schemas.WeekRead:
        """Create a week, numbering it automatically unless a number was given.

        A caller-chosen number that is already taken fails with
        ``ConstraintViolation``; only automatic numbers are retried.
        """

        data = validate(EntityKind.WEEK, payload).unwrap()
        MonthService.require_month(store, data["month_id"], field="month_id")

        if data.get("week_number") is None:
            data.pop("week_number", None)
            record = SequencingService.create_week(store, data)
        else:
            record = store.insert(WEEKS, data)

        week = mappers.to_week(record)
        LOGGER.info("Created week %s (#%s) in month %s", week.id, week.week_number, week.month_id)
        return week

    @classmethod
    def update_week(cls, store: Store, week_id: str, payload: Payload) -> schemas.WeekRead:
        patch = validate(EntityKind.WEEK, payload, partial=True).unwrap()
        existing = cls.require_week(store, week_id)

        check_week_dates(
            patch.get("start_date", existing.start_date),
            patch.get("end_date", existing.end_date),
        )
        if patch.get("month_id") and patch["month_id"] != existing.month_id:
            MonthService.require_month(store, patch["month_id"], field="month_id")

        patch["updated_at"] = utcnow()
        record = store.update(WEEKS, week_id, patch)
        if record is None:
            raise NotFoundError("week", week_id)
        return mappers.to_week(record)

    @classmethod
    def delete_week(cls, store: Store, week_id: str) -> schemas.WeekRead:
        """Delete a week without payments and return it as it was stored."""

        week = cls.require_week(store, week_id)
        ReconciliationService.ensure_week_deletable(store, week_id)
        if not store.delete(WEEKS, week_id):
            raise NotFoundError("week", week_id)
        LOGGER.info("Deleted week %s from month %s", week_id, week.month_id)
        return week

    @classmethod
    def payments_total(cls, store: Store, week_id: str) -> Decimal:
        cls.require_week(store, week_id)
        payments = mappers.to_models(
            schemas.PaymentRead, store.list(PAYMENTS, filters=[eq("week_id", week_id)])
        )
        return aggregation.sum_amounts(payments)

    @staticmethod
    def week_stats(store: Store, week_id: str) -> schemas.WeekSummary:
        return SummaryService.week_summary(store, week_id)

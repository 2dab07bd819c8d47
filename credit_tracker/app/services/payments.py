"""Business logic for payments."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from .. import aggregation, mappers, schemas
from ..exceptions import NotFoundError, ValidationError
from ..models.timestamps import utcnow
from ..store import PAYMENTS, WEEKS, Store, desc, eq, gte, ilike, in_, lte
from ..validation import EntityKind, validate
from .months import MonthService
from .providers import ProviderService
from .summaries import SummaryService
from .weeks import WeekService

LOGGER = logging.getLogger(__name__)

Payload = Union[Mapping[str, Any], BaseModel]

_NEWEST_FIRST = (desc("payment_date"), desc("created_at"))
_DETAIL_INCLUDES = ("provider", "week.month")


class PaymentService:
    """Records payments against a week and a provider."""

    @staticmethod
    def list_by_week(store: Store, week_id: str) -> list[schemas.PaymentRead]:
        records = store.list(PAYMENTS, filters=[eq("week_id", week_id)], order=_NEWEST_FIRST)
        return mappers.to_models(schemas.PaymentRead, records)

    @staticmethod
    def list_by_provider(store: Store, provider_id: str) -> list[schemas.PaymentRead]:
        records = store.list(
            PAYMENTS, filters=[eq("provider_id", provider_id)], order=_NEWEST_FIRST
        )
        return mappers.to_models(schemas.PaymentRead, records)

    @staticmethod
    def list_by_date_range(
        store: Store, start_date: date, end_date: date
    ) -> list[schemas.PaymentRead]:
        if start_date > end_date:
            raise ValidationError({"end_date": ["end_date must be on or after start_date"]})
        records = store.list(
            PAYMENTS,
            filters=[gte("payment_date", start_date), lte("payment_date", end_date)],
            order=_NEWEST_FIRST,
        )
        return mappers.to_models(schemas.PaymentRead, records)

    @staticmethod
    def list_with_details(
        store: Store, week_id: Optional[str] = None
    ) -> list[schemas.PaymentWithDetails]:
        filters = [eq("week_id", week_id)] if week_id is not None else []
        records = store.list(
            PAYMENTS, filters=filters, order=_NEWEST_FIRST, include=_DETAIL_INCLUDES
        )
        return [mappers.to_payment_with_details(record) for record in records]

    @staticmethod
    def search_by_description(store: Store, term: str) -> list[schemas.PaymentRead]:
        if not term or not term.strip():
            return []
        records = store.list(
            PAYMENTS, filters=[ilike("description", term)], order=_NEWEST_FIRST
        )
        return mappers.to_models(schemas.PaymentRead, records)

    @staticmethod
    def get_payment(store: Store, payment_id: str) -> Optional[schemas.PaymentRead]:
        record = store.get(PAYMENTS, payment_id)
        return mappers.to_payment(record) if record is not None else None

    @classmethod
    def require_payment(cls, store: Store, payment_id: str) -> schemas.PaymentRead:
        payment = cls.get_payment(store, payment_id)
        if payment is None:
            raise NotFoundError("payment", payment_id)
        return payment

    @staticmethod
    def get_payment_with_details(
        store: Store, payment_id: str
    ) -> Optional[schemas.PaymentWithDetails]:
        record = store.get(PAYMENTS, payment_id, include=_DETAIL_INCLUDES)
        return mappers.to_payment_with_details(record) if record is not None else None

    @staticmethod
    def create_payment(store: Store, payload: Payload) -> schemas.PaymentRead:
        """Record a payment after checking that its week and provider exist.

        Inactive providers are accepted; ``is_active`` only filters listings.
        """

        data = validate(EntityKind.PAYMENT, payload).unwrap()
        WeekService.require_week(store, data["week_id"], field="week_id")
        ProviderService.require_provider(store, data["provider_id"], field="provider_id")

        payment = mappers.to_payment(store.insert(PAYMENTS, data))
        LOGGER.info(
            "Recorded payment %s of %s for week %s", payment.id, payment.amount, payment.week_id
        )
        return payment

    @classmethod
    def update_payment(
        cls, store: Store, payment_id: str, payload: Payload
    ) -> schemas.PaymentRead:
        patch = validate(EntityKind.PAYMENT, payload, partial=True).unwrap()
        existing = cls.require_payment(store, payment_id)

        if patch.get("week_id") and patch["week_id"] != existing.week_id:
            WeekService.require_week(store, patch["week_id"], field="week_id")
        if patch.get("provider_id") and patch["provider_id"] != existing.provider_id:
            ProviderService.require_provider(store, patch["provider_id"], field="provider_id")

        patch["updated_at"] = utcnow()
        record = store.update(PAYMENTS, payment_id, patch)
        if record is None:
            raise NotFoundError("payment", payment_id)
        return mappers.to_payment(record)

    @staticmethod
    def delete_payment(store: Store, payment_id: str) -> None:
        if not store.delete(PAYMENTS, payment_id):
            raise NotFoundError("payment", payment_id)
        LOGGER.info("Deleted payment %s", payment_id)

    @staticmethod
    def total_by_week(store: Store, week_id: str) -> Decimal:
        return WeekService.payments_total(store, week_id)

    @staticmethod
    def total_by_month(store: Store, month_id: str) -> Decimal:
        MonthService.require_month(store, month_id)
        week_ids = [
            record["id"] for record in store.list(WEEKS, filters=[eq("month_id", month_id)])
        ]
        if not week_ids:
            return aggregation.ZERO
        payments = mappers.to_models(
            schemas.PaymentRead, store.list(PAYMENTS, filters=[in_("week_id", week_ids)])
        )
        return aggregation.sum_amounts(payments)

    @staticmethod
    def payment_stats(store: Store, week_id: Optional[str] = None) -> schemas.PaymentStats:
        return SummaryService.payment_stats(store, week_id)

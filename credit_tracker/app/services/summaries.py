"""Fetch snapshots from the store and run them through the aggregation engine."""

from __future__ import annotations

from typing import Optional

from .. import aggregation, mappers, schemas
from ..exceptions import NotFoundError
from ..store import MONTHS, PAYMENTS, PROVIDERS, WEEKS, Store, asc, desc, eq


class SummaryService:
    """Read-only roll-ups. Each method issues a single nested store read."""

    @staticmethod
    def week_summary(store: Store, week_id: str) -> schemas.WeekSummary:
        record = store.get(WEEKS, week_id, include=("payments",))
        if record is None:
            raise NotFoundError("week", week_id)
        return aggregation.week_summary(mappers.to_week_with_payments(record))

    @staticmethod
    def week_summaries(store: Store, month_id: str) -> list[schemas.WeekSummary]:
        records = store.list(
            WEEKS,
            filters=[eq("month_id", month_id)],
            order=[asc("week_number")],
            include=("payments",),
        )
        return [
            aggregation.week_summary(mappers.to_week_with_payments(record))
            for record in records
        ]

    @staticmethod
    def month_summary(store: Store, month_id: str) -> schemas.MonthSummary:
        record = store.get(MONTHS, month_id, include=("weeks.payments",))
        if record is None:
            raise NotFoundError("month", month_id)
        return aggregation.month_summary(mappers.to_month_with_weeks(record))

    @staticmethod
    def month_summaries(store: Store) -> list[schemas.MonthSummary]:
        records = store.list(
            MONTHS,
            order=[desc("year"), asc("name")],
            include=("weeks.payments",),
        )
        return [
            aggregation.month_summary(mappers.to_month_with_weeks(record))
            for record in records
        ]

    @staticmethod
    def provider_summary(store: Store, provider_id: str) -> schemas.ProviderSummary:
        record = store.get(PROVIDERS, provider_id, include=("payments",))
        if record is None:
            raise NotFoundError("provider", provider_id)
        return aggregation.provider_summary(mappers.to_provider_with_payments(record))

    @staticmethod
    def provider_summaries(store: Store) -> list[schemas.ProviderSummary]:
        records = store.list(PROVIDERS, order=[asc("name")], include=("payments",))
        return [
            aggregation.provider_summary(mappers.to_provider_with_payments(record))
            for record in records
        ]

    @staticmethod
    def payment_stats(store: Store, week_id: Optional[str] = None) -> schemas.PaymentStats:
        filters = [eq("week_id", week_id)] if week_id is not None else []
        payments = mappers.to_models(schemas.PaymentRead, store.list(PAYMENTS, filters=filters))
        return aggregation.payment_stats(payments)

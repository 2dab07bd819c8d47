"""Cross-entity rules: month totals and delete guards."""

from __future__ import annotations

import logging

from .. import aggregation, mappers, schemas
from ..exceptions import ConstraintViolation, NotFoundError
from ..models.timestamps import utcnow
from ..store import MONTHS, PAYMENTS, WEEKS, Store, asc, desc, eq

LOGGER = logging.getLogger(__name__)


class ReconciliationService:
    """Keeps stored roll-ups consistent and guards deletes that would orphan rows.

    Month totals are recalculated only when asked. Week services never call
    ``recalculate_month_total`` themselves; whoever mutates a week's credit is
    responsible for doing so afterwards. Concurrent recalculations of the same
    month are last-writer-wins.
    """

    @staticmethod
    def recalculate_month_total(store: Store, month_id: str) -> schemas.MonthRead:
        if store.get(MONTHS, month_id) is None:
            raise NotFoundError("month", month_id)

        weeks = mappers.to_models(
            schemas.WeekRead, store.list(WEEKS, filters=[eq("month_id", month_id)])
        )
        total = aggregation.sum_credit(weeks)

        record = store.update(
            MONTHS, month_id, {"total_credit": total, "updated_at": utcnow()}
        )
        if record is None:
            raise NotFoundError("month", month_id)

        LOGGER.info("Recalculated month %s total credit: %s", month_id, total)
        return mappers.to_month(record)

    @staticmethod
    def can_delete_provider(store: Store, provider_id: str) -> bool:
        return store.count(PAYMENTS, filters=[eq("provider_id", provider_id)]) == 0

    @classmethod
    def ensure_provider_deletable(cls, store: Store, provider_id: str) -> None:
        if not cls.can_delete_provider(store, provider_id):
            LOGGER.warning("Refusing to delete provider %s with payments", provider_id)
            raise ConstraintViolation("Provider has payments and cannot be deleted")

    @staticmethod
    def ensure_month_deletable(store: Store, month_id: str) -> None:
        if store.count(WEEKS, filters=[eq("month_id", month_id)]) > 0:
            LOGGER.warning("Refusing to delete month %s with weeks", month_id)
            raise ConstraintViolation("Month has weeks and cannot be deleted")

    @staticmethod
    def ensure_week_deletable(store: Store, week_id: str) -> None:
        if store.count(PAYMENTS, filters=[eq("week_id", week_id)]) > 0:
            LOGGER.warning("Refusing to delete week %s with payments", week_id)
            raise ConstraintViolation("Week has payments and cannot be deleted")

    @staticmethod
    def find_month_total_drift(store: Store) -> list[schemas.MonthTotalMismatch]:
        """Return months whose stored total differs from the sum of their weeks."""

        months = mappers.to_models(
            schemas.MonthWithWeeks,
            store.list(MONTHS, order=[desc("year"), asc("name")], include=("weeks",)),
        )
        mismatches = []
        for month in months:
            mismatch = aggregation.month_total_mismatch(month)
            if mismatch is not None:
                mismatches.append(mismatch)
        return mismatches

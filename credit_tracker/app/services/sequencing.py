"""Week numbering inside a month."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..config import week_number_max_attempts
from ..exceptions import ConcurrencyError, ConstraintViolation
from ..store import WEEKS, Record, Store, desc, eq

LOGGER = logging.getLogger(__name__)


class SequencingService:
    """Assigns the next free ``week_number`` for a month.

    The number is the current maximum plus one (gaps are never filled). Two
    writers may compute the same number; the store's unique constraint on
    ``(month_id, week_number)`` rejects the second insert, which is then
    retried with a freshly computed number a bounded number of times.
    """

    @staticmethod
    def next_week_number(store: Store, month_id: str) -> int:
        rows = store.list(
            WEEKS,
            filters=[eq("month_id", month_id)],
            order=[desc("week_number")],
            limit=1,
        )
        if not rows:
            return 1
        return int(rows[0]["week_number"]) + 1

    @classmethod
    def create_week(
        cls,
        store: Store,
        values: Mapping[str, Any],
        *,
        max_attempts: Optional[int] = None,
    ) -> Record:
        """Insert a week under the next free number, retrying on collisions."""

        attempts = max_attempts if max_attempts is not None else week_number_max_attempts()
        month_id = values["month_id"]

        for attempt in range(1, attempts + 1):
            week_number = cls.next_week_number(store, month_id)
            try:
                return store.insert(WEEKS, {**values, "week_number": week_number})
            except ConstraintViolation as exc:
                if exc.field != "week_number":
                    raise
                LOGGER.warning(
                    "Week number %s already taken in month %s (attempt %s of %s)",
                    week_number,
                    month_id,
                    attempt,
                    attempts,
                )

        raise ConcurrencyError(
            f"Could not assign a week number in month {month_id} after {attempts} attempts"
        )

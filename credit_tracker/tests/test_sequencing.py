from __future__ import annotations

import uuid
from datetime import date
from typing import Any, Mapping, Optional, Sequence

import pytest

from credit_tracker.app.config import WEEK_NUMBER_ATTEMPTS_ENV, week_number_max_attempts
from credit_tracker.app.exceptions import ConcurrencyError, ConstraintViolation
from credit_tracker.app.services import MonthService, SequencingService, WeekService
from credit_tracker.app.store import WEEKS, Filter, Order, Record, Store


class ScriptedWeekStore(Store):
    """In-memory weeks collection where another writer may win each insert.

    ``steal`` lists, per insert attempt, whether a concurrent writer grabs the
    computed number just before this insert lands.
    """

    def __init__(self, numbers: Sequence[int], steal: Sequence[bool]):
        self.rows: list[Record] = [
            {"id": str(uuid.uuid4()), "month_id": "m", "week_number": number}
            for number in numbers
        ]
        self.steal = list(steal)
        self.insert_attempts = 0

    def get(self, collection, record_id, *, include=()):
        return next((row for row in self.rows if row["id"] == record_id), None)

    def list(
        self,
        collection: str,
        *,
        filters: Sequence[Filter] = (),
        order: Sequence[Order] = (),
        include: Sequence[str] = (),
        limit: Optional[int] = None,
    ) -> list[Record]:
        assert collection == WEEKS
        rows = sorted(self.rows, key=lambda row: row["week_number"], reverse=True)
        return rows[:limit] if limit else rows

    def count(self, collection, *, filters=()):
        return len(self.rows)

    def insert(self, collection: str, record: Mapping[str, Any]) -> Record:
        self.insert_attempts += 1
        stolen = self.steal.pop(0) if self.steal else False
        if stolen:
            self.rows.append(
                {"id": str(uuid.uuid4()), "month_id": "m", "week_number": record["week_number"]}
            )
        if any(row["week_number"] == record["week_number"] for row in self.rows):
            raise ConstraintViolation("duplicate week number", field="week_number")
        row = {"id": str(uuid.uuid4()), **record}
        self.rows.append(row)
        return row

    def update(self, collection, record_id, patch):
        raise NotImplementedError

    def delete(self, collection, record_id):
        raise NotImplementedError


@pytest.mark.parametrize(
    ("existing", "expected"),
    [([1, 2, 3], 4), ([], 1), ([1, 3], 4)],
)
def test_next_week_number_is_max_plus_one(existing, expected):
    store = ScriptedWeekStore(existing, steal=[])

    assert SequencingService.next_week_number(store, "m") == expected


def test_collision_is_retried_with_a_fresh_number():
    store = ScriptedWeekStore([1, 2], steal=[True, False])

    record = SequencingService.create_week(store, {"month_id": "m"}, max_attempts=3)

    assert record["week_number"] == 4
    assert store.insert_attempts == 2


def test_exhausted_retries_raise_concurrency_error():
    store = ScriptedWeekStore([1], steal=[True, True, True])

    with pytest.raises(ConcurrencyError):
        SequencingService.create_week(store, {"month_id": "m"}, max_attempts=3)

    assert store.insert_attempts == 3


def test_other_constraint_violations_are_not_retried():
    class RejectingStore(ScriptedWeekStore):
        def insert(self, collection, record):
            self.insert_attempts += 1
            raise ConstraintViolation("foreign key failed")

    store = RejectingStore([], steal=[])

    with pytest.raises(ConstraintViolation):
        SequencingService.create_week(store, {"month_id": "m"}, max_attempts=3)

    assert store.insert_attempts == 1


def test_attempts_come_from_environment(monkeypatch):
    monkeypatch.setenv(WEEK_NUMBER_ATTEMPTS_ENV, "5")
    assert week_number_max_attempts() == 5

    monkeypatch.setenv(WEEK_NUMBER_ATTEMPTS_ENV, "0")
    with pytest.raises(ValueError):
        week_number_max_attempts()

    monkeypatch.delenv(WEEK_NUMBER_ATTEMPTS_ENV)
    assert week_number_max_attempts() == 3


def test_weeks_are_numbered_in_creation_order(store):
    month = MonthService.create_month(store, {"name": "Febrero", "year": 2025})

    numbers = [
        WeekService.create_week(
            store,
            {"month_id": month.id, "start_date": date(2025, 2, day), "end_date": date(2025, 2, day)},
        ).week_number
        for day in (1, 8, 15)
    ]

    assert numbers == [1, 2, 3]
    assert WeekService.next_week_number(store, month.id) == 4


def test_gaps_are_not_filled(store):
    month = MonthService.create_month(store, {"name": "Marzo", "year": 2025})
    for number in (1, 3):
        WeekService.create_week(
            store,
            {
                "month_id": month.id,
                "week_number": number,
                "start_date": date(2025, 3, number),
                "end_date": date(2025, 3, number),
            },
        )

    week = WeekService.create_week(
        store,
        {"month_id": month.id, "start_date": date(2025, 3, 20), "end_date": date(2025, 3, 26)},
    )

    assert week.week_number == 4


def test_explicit_duplicate_number_is_rejected_by_the_store(store):
    month = MonthService.create_month(store, {"name": "Abril", "year": 2025})
    payload = {
        "month_id": month.id,
        "week_number": 1,
        "start_date": date(2025, 4, 1),
        "end_date": date(2025, 4, 7),
    }
    WeekService.create_week(store, payload)

    with pytest.raises(ConstraintViolation) as excinfo:
        WeekService.create_week(store, payload)

    assert excinfo.value.field == "week_number"
    assert len(WeekService.list_weeks(store, month.id)) == 1


def test_numbering_is_per_month(store):
    first = MonthService.create_month(store, {"name": "Mayo", "year": 2025})
    second = MonthService.create_month(store, {"name": "Junio", "year": 2025})
    WeekService.create_week(
        store, {"month_id": first.id, "start_date": date(2025, 5, 1), "end_date": date(2025, 5, 7)}
    )

    week = WeekService.create_week(
        store, {"month_id": second.id, "start_date": date(2025, 6, 1), "end_date": date(2025, 6, 7)}
    )

    assert week.week_number == 1

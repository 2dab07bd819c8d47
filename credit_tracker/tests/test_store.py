from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from credit_tracker.app.exceptions import ConstraintViolation, StoreError
from credit_tracker.app.store import (
    MONTHS,
    PAYMENTS,
    PROVIDERS,
    WEEKS,
    asc,
    desc,
    eq,
    gte,
    ilike,
    in_,
    lte,
)


def test_missing_and_malformed_ids_are_not_found(store):
    assert store.get(MONTHS, str(uuid4())) is None
    assert store.get(MONTHS, "not-a-uuid") is None
    assert store.update(MONTHS, str(uuid4()), {"name": "X"}) is None
    assert store.delete(MONTHS, str(uuid4())) is False


def test_insert_assigns_id_and_timestamps(store):
    record = store.insert(MONTHS, {"name": "Enero", "year": 2025})

    assert len(record["id"]) == 36
    assert record["total_credit"] == Decimal("0.00")
    assert record["created_at"] is not None
    assert record["updated_at"] is not None


def test_nested_includes_are_loaded_in_one_call(store, seed_month):
    record = store.get(PAYMENTS, seed_month["payments"][0].id, include=("provider", "week.month"))

    assert record["provider"]["name"] == "Proveedor Uno"
    assert record["week"]["week_number"] == 1
    assert record["week"]["month"]["name"] == "Enero"


def test_one_to_many_includes_are_lists(store, seed_month):
    record = store.get(MONTHS, seed_month["month"].id, include=("weeks.payments",))

    assert [week["week_number"] for week in record["weeks"]] == [1, 2]
    assert len(record["weeks"][0]["payments"]) == 2
    assert record["weeks"][1]["payments"] == []


def test_filters_and_ordering(store, seed_month):
    week_id = seed_month["week_one"].id

    newest_first = store.list(PAYMENTS, filters=[eq("week_id", week_id)], order=[desc("payment_date")])
    assert [row["amount"] for row in newest_first] == [Decimal("200.00"), Decimal("100.00")]

    in_range = store.list(
        PAYMENTS,
        filters=[gte("payment_date", date(2025, 1, 3)), lte("payment_date", date(2025, 1, 31))],
    )
    assert len(in_range) == 1

    matched = store.list(PAYMENTS, filters=[ilike("description", "SEGUNDO")])
    assert [row["description"] for row in matched] == ["Segundo abono"]

    weeks = store.list(WEEKS, filters=[in_("id", [week_id])], order=[asc("week_number")])
    assert [row["id"] for row in weeks] == [week_id]


def test_count_and_limit(store, seed_month):
    assert store.count(WEEKS, filters=[eq("month_id", seed_month["month"].id)]) == 2
    assert len(store.list(WEEKS, order=[desc("week_number")], limit=1)) == 1


def test_unknown_column_is_a_programming_error(store):
    with pytest.raises(ValueError):
        store.list(PROVIDERS, filters=[eq("missing", 1)])


def test_foreign_key_violation_becomes_constraint_violation(store):
    with pytest.raises(ConstraintViolation) as excinfo:
        store.insert(
            WEEKS,
            {
                "month_id": str(uuid4()),
                "week_number": 1,
                "start_date": date(2025, 1, 1),
                "end_date": date(2025, 1, 7),
            },
        )

    assert excinfo.value.field is None


def test_store_stays_usable_after_a_rejected_write(store):
    with pytest.raises(ConstraintViolation):
        store.insert(PAYMENTS, {"week_id": str(uuid4()), "provider_id": str(uuid4())})

    record = store.insert(PROVIDERS, {"name": "Después del error"})
    assert store.get(PROVIDERS, record["id"])["name"] == "Después del error"


def test_database_failures_become_store_errors(store, monkeypatch):
    def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(store.session, "commit", broken_commit)

    with pytest.raises(StoreError):
        store.insert(PROVIDERS, {"name": "Sin conexión"})


def test_failed_reload_after_write_becomes_store_error(store, monkeypatch):
    def broken_refresh(_obj):
        raise OperationalError("refresh", {}, Exception("connection lost"))

    monkeypatch.setattr(store.session, "refresh", broken_refresh)

    with pytest.raises(StoreError):
        store.insert(MONTHS, {"name": "Febrero", "year": 2025})


def test_failed_reload_after_update_becomes_store_error(store, seed_month, monkeypatch):
    def broken_refresh(_obj):
        raise OperationalError("refresh", {}, Exception("connection lost"))

    monkeypatch.setattr(store.session, "refresh", broken_refresh)

    with pytest.raises(StoreError):
        store.update(MONTHS, seed_month["month"].id, {"name": "Marzo"})


def test_limit_below_one_is_rejected(store, seed_month):
    with pytest.raises(ValueError):
        store.list(WEEKS, limit=0)


def test_malformed_ids_in_filters_match_nothing(store, seed_month):
    assert store.list(WEEKS, filters=[eq("month_id", "garbage")]) == []
    assert store.count(PAYMENTS, filters=[in_("week_id", ["garbage"])]) == 0

    weeks = store.list(WEEKS, filters=[in_("id", ["garbage", seed_month["week_one"].id])])
    assert [row["id"] for row in weeks] == [seed_month["week_one"].id]

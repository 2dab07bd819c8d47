from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal

from credit_tracker.app.scripts import reconcile_month_totals
from credit_tracker.app.services import MonthService
from credit_tracker.app.store import MONTHS


def _use_session(monkeypatch, db_session) -> None:
    @contextmanager
    def fake_scope():
        yield db_session

    monkeypatch.setattr(reconcile_month_totals, "session_scope", fake_scope)


def test_clean_database_exits_zero(monkeypatch, db_session, seed_month):
    _use_session(monkeypatch, db_session)

    assert reconcile_month_totals.main([]) == 0


def test_drift_is_reported_and_fixed(monkeypatch, db_session, store, seed_month):
    _use_session(monkeypatch, db_session)
    month_id = seed_month["month"].id
    store.update(MONTHS, month_id, {"total_credit": Decimal("5.00")})

    assert reconcile_month_totals.main([]) == 1
    assert MonthService.require_month(store, month_id).total_credit == Decimal("5.00")

    assert reconcile_month_totals.main(["--fix"]) == 0
    assert MonthService.require_month(store, month_id).total_credit == Decimal("800.00")

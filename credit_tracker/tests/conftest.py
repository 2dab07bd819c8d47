from __future__ import annotations

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure the project root (which exposes the ``credit_tracker`` package) is on ``sys.path``
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from credit_tracker.app import models  # noqa: E402,F401
from credit_tracker.app.database import Base  # noqa: E402
from credit_tracker.app.main import app  # noqa: E402
from credit_tracker.app.routers.common import get_store  # noqa: E402
from credit_tracker.app.services import (  # noqa: E402
    MonthService,
    PaymentService,
    ProviderService,
    ReconciliationService,
    WeekService,
)
from credit_tracker.app.store import SqlAlchemyStore, Store  # noqa: E402


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    # A fresh in-memory database per test; services commit on every write.
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Generator[Session, None, None]:
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db_session: Session) -> Store:
    return SqlAlchemyStore(db_session)


@pytest.fixture
def client(store: Store, monkeypatch) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("RUN_MIGRATIONS_ON_STARTUP", "0")

    def override_get_store() -> Generator[Store, None, None]:
        yield store

    app.dependency_overrides[get_store] = override_get_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_store, None)


def _add_week(store: Store, month_id: str, credit: str, start: date, end: date, **extra):
    week = WeekService.create_week(
        store,
        {
            "month_id": month_id,
            "start_date": start,
            "end_date": end,
            "credit_amount": Decimal(credit),
            **extra,
        },
    )
    ReconciliationService.recalculate_month_total(store, month_id)
    return week


@pytest.fixture
def make_week(store: Store):
    """Create a week and refresh its month total, as the HTTP layer does."""

    def factory(month_id: str, credit: str, start: date, end: date, **extra):
        return _add_week(store, month_id, credit, start, end, **extra)

    return factory


@pytest.fixture
def seed_month(store: Store) -> dict:
    """Month M: two weeks of 500 and 300 credit, 300 paid in week one."""

    month = MonthService.create_month(store, {"name": "Enero", "year": 2025})
    provider = ProviderService.create_provider(
        store, {"name": "Proveedor Uno", "contact_info": "555-0100"}
    )
    week_one = _add_week(store, month.id, "500.00", date(2025, 1, 1), date(2025, 1, 7))
    week_two = _add_week(store, month.id, "300.00", date(2025, 1, 8), date(2025, 1, 14))

    payments = [
        PaymentService.create_payment(
            store,
            {
                "week_id": week_one.id,
                "provider_id": provider.id,
                "amount": Decimal("100.00"),
                "payment_date": date(2025, 1, 2),
                "description": "Primer abono",
            },
        ),
        PaymentService.create_payment(
            store,
            {
                "week_id": week_one.id,
                "provider_id": provider.id,
                "amount": Decimal("200.00"),
                "payment_date": date(2025, 1, 5),
                "description": "Segundo abono",
            },
        ),
    ]

    return {
        "month": MonthService.require_month(store, month.id),
        "provider": provider,
        "week_one": week_one,
        "week_two": week_two,
        "payments": payments,
    }

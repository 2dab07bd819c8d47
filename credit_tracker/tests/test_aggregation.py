from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

from credit_tracker.app import aggregation, schemas

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _payment(amount: str, paid_on: date = date(2025, 1, 2), week_id: str = "w") -> dict:
    return {
        "id": str(uuid4()),
        "week_id": week_id,
        "provider_id": "p",
        "amount": Decimal(amount),
        "payment_date": paid_on,
        "description": None,
        "created_at": NOW,
        "updated_at": NOW,
    }


def _week(credit: str, payments: list[dict], number: int = 1) -> dict:
    return {
        "id": str(uuid4()),
        "month_id": "m",
        "week_number": number,
        "start_date": date(2025, 1, 1),
        "end_date": date(2025, 1, 7),
        "credit_amount": Decimal(credit),
        "created_at": NOW,
        "updated_at": NOW,
        "payments": payments,
    }


def _month(total: str, weeks: list[dict]) -> schemas.MonthWithWeeks:
    return schemas.MonthWithWeeks.model_validate(
        {
            "id": "m",
            "name": "Enero",
            "year": 2025,
            "total_credit": Decimal(total),
            "created_at": NOW,
            "updated_at": NOW,
            "weeks": weeks,
        }
    )


def test_week_without_payments_keeps_full_credit():
    summary = aggregation.week_summary(
        schemas.WeekWithPayments.model_validate(_week("500.00", []))
    )

    assert summary.total_paid == Decimal("0.00")
    assert summary.remaining == Decimal("500.00")
    assert summary.progress_pct == Decimal("0.00")
    assert summary.payments_count == 0


def test_zero_credit_week_reports_zero_progress():
    summary = aggregation.week_summary(
        schemas.WeekWithPayments.model_validate(_week("0", [_payment("25.00")]))
    )

    assert summary.progress_pct == Decimal("0.00")
    assert summary.remaining == Decimal("-25.00")


def test_overpaid_week_is_not_clamped():
    summary = aggregation.week_summary(
        schemas.WeekWithPayments.model_validate(
            _week("100.00", [_payment("90.00"), _payment("60.00")])
        )
    )

    assert summary.total_paid == Decimal("150.00")
    assert summary.remaining == Decimal("-50.00")
    assert summary.progress_pct == Decimal("150.00")


def test_progress_is_rounded_to_cents():
    summary = aggregation.week_summary(
        schemas.WeekWithPayments.model_validate(_week("300.00", [_payment("100.00")]))
    )

    assert summary.progress_pct == Decimal("33.33")


def test_month_summary_rolls_up_weeks():
    month = _month(
        "800.00",
        [
            _week("500.00", [_payment("100.00"), _payment("200.00")], number=1),
            _week("300.00", [], number=2),
        ],
    )

    summary = aggregation.month_summary(month)

    assert summary.weeks_count == 2
    assert summary.total_payments == Decimal("300.00")
    assert summary.average_weekly_credit == Decimal("400.00")
    assert summary.remaining_credit == Decimal("500.00")
    assert summary.progress_pct == Decimal("37.50")
    assert summary.month.total_credit == Decimal("800.00")


def test_month_without_weeks_has_zero_average():
    summary = aggregation.month_summary(_month("0", []))

    assert summary.weeks_count == 0
    assert summary.average_weekly_credit == Decimal("0.00")
    assert summary.progress_pct == Decimal("0.00")


def test_provider_summary_dates_and_average():
    provider = schemas.ProviderWithPayments.model_validate(
        {
            "id": "p",
            "name": "Proveedor",
            "is_active": True,
            "created_at": NOW,
            "updated_at": NOW,
            "payments": [
                _payment("10.00", date(2025, 3, 5)),
                _payment("20.00", date(2025, 1, 9)),
                _payment("15.00", date(2025, 2, 1)),
            ],
        }
    )

    summary = aggregation.provider_summary(provider)

    assert summary.total_payments == Decimal("45.00")
    assert summary.payments_count == 3
    assert summary.average_payment == Decimal("15.00")
    assert summary.first_payment_date == date(2025, 1, 9)
    assert summary.last_payment_date == date(2025, 3, 5)


def test_payment_stats_on_empty_input():
    stats = aggregation.payment_stats([])

    assert stats.payments_count == 0
    assert stats.total_amount == Decimal("0.00")
    assert stats.max_payment == Decimal("0.00")


def test_payment_stats_min_max():
    payments = [
        schemas.PaymentRead.model_validate(_payment(amount))
        for amount in ("10.00", "0.01", "999999.99")
    ]

    stats = aggregation.payment_stats(payments)

    assert stats.total_amount == Decimal("1000010.00")
    assert stats.max_payment == Decimal("999999.99")
    assert stats.min_payment == Decimal("0.01")
    assert stats.average_payment == Decimal("333336.67")


def test_month_total_mismatch_detects_drift():
    assert aggregation.month_total_mismatch(_month("800.00", [_week("800.00", [])])) is None

    mismatch = aggregation.month_total_mismatch(
        _month("900.00", [_week("500.00", []), _week("300.00", [], number=2)])
    )

    assert mismatch is not None
    assert mismatch.weeks_total == Decimal("800.00")
    assert mismatch.difference == Decimal("100.00")

"""Derived totals for weeks, months and providers.

Every function here is a pure function of the snapshot it receives: it never
touches the store. Callers fetch a month with its weeks and payments (or a
provider with its payments) in one store call and hand the result over.

Percentages are not clamped. An over-paid week reports more than 100 percent
progress and a negative remaining amount; limiting that to a visual range is
left to whoever displays it.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from . import schemas

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")
ZERO = Decimal("0.00")


def _money(value: Decimal | int | str | None) -> Decimal:
    return Decimal(str(value or 0)).quantize(CENTS, rounding=ROUND_HALF_UP)


def _progress(paid: Decimal, credit: Decimal) -> Decimal:
    if credit <= 0:
        return ZERO
    return (paid / credit * HUNDRED).quantize(CENTS, rounding=ROUND_HALF_UP)


def sum_amounts(payments: Iterable[schemas.PaymentRead]) -> Decimal:
    return _money(sum((_money(payment.amount) for payment in payments), ZERO))


def sum_credit(weeks: Iterable[schemas.WeekRead]) -> Decimal:
    return _money(sum((_money(week.credit_amount) for week in weeks), ZERO))


def week_summary(week: schemas.WeekWithPayments) -> schemas.WeekSummary:
    credit = _money(week.credit_amount)
    paid = sum_amounts(week.payments)
    return schemas.WeekSummary(
        week_id=week.id,
        month_id=week.month_id,
        week_number=week.week_number,
        credit_amount=credit,
        total_paid=paid,
        remaining=credit - paid,
        progress_pct=_progress(paid, credit),
        payments_count=len(week.payments),
    )


def month_summary(month: schemas.MonthWithWeeks) -> schemas.MonthSummary:
    weeks_count = len(month.weeks)
    total_credit = _money(month.total_credit)
    total_payments = _money(
        sum((week_summary(week).total_paid for week in month.weeks), ZERO)
    )
    if weeks_count > 0:
        average = (total_credit / weeks_count).quantize(CENTS, rounding=ROUND_HALF_UP)
    else:
        average = ZERO

    return schemas.MonthSummary(
        month=schemas.MonthRead.model_validate(month.model_dump(exclude={"weeks"})),
        weeks_count=weeks_count,
        total_payments=total_payments,
        average_weekly_credit=average,
        remaining_credit=total_credit - total_payments,
        progress_pct=_progress(total_payments, total_credit),
    )


def provider_summary(provider: schemas.ProviderWithPayments) -> schemas.ProviderSummary:
    payments = provider.payments
    total = sum_amounts(payments)
    count = len(payments)
    dates = [payment.payment_date for payment in payments]

    return schemas.ProviderSummary(
        provider=schemas.ProviderRead.model_validate(provider.model_dump(exclude={"payments"})),
        total_payments=total,
        payments_count=count,
        average_payment=(total / count).quantize(CENTS, rounding=ROUND_HALF_UP) if count else ZERO,
        first_payment_date=min(dates) if dates else None,
        last_payment_date=max(dates) if dates else None,
    )


def payment_stats(payments: Sequence[schemas.PaymentRead]) -> schemas.PaymentStats:
    amounts = [_money(payment.amount) for payment in payments]
    total = _money(sum(amounts, ZERO))
    count = len(amounts)

    return schemas.PaymentStats(
        total_amount=total,
        payments_count=count,
        average_payment=(total / count).quantize(CENTS, rounding=ROUND_HALF_UP) if count else ZERO,
        max_payment=max(amounts) if amounts else ZERO,
        min_payment=min(amounts) if amounts else ZERO,
    )


def month_total_mismatch(
    month: schemas.MonthWithWeeks,
) -> Optional[schemas.MonthTotalMismatch]:
    """Describe the drift between a month's stored total and its weeks, if any."""

    stored = _money(month.total_credit)
    expected = sum_credit(month.weeks)
    if stored == expected:
        return None
    return schemas.MonthTotalMismatch(
        month_id=month.id,
        name=month.name,
        year=month.year,
        stored_total=stored,
        weeks_total=expected,
        difference=stored - expected,
    )

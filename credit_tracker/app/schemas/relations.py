"""Read models for records fetched together with their related rows."""

from __future__ import annotations

from typing import Optional

from .month import MonthRead
from .payment import PaymentRead
from .provider import ProviderRead
from .week import WeekRead


class WeekPayment(PaymentRead):
    """Payment listed under its week, with the provider when it was fetched."""

    provider: Optional[ProviderRead] = None


class WeekWithPayments(WeekRead):
    payments: list[WeekPayment] = []


class WeekWithMonth(WeekRead):
    month: MonthRead


class MonthWithWeeks(MonthRead):
    weeks: list[WeekWithPayments] = []


class PaymentWithDetails(PaymentRead):
    provider: ProviderRead
    week: WeekWithMonth


class ProviderWithPayments(ProviderRead):
    payments: list[PaymentRead] = []

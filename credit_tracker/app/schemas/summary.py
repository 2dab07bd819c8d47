"""Derived figures computed by the aggregation engine."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from .month import MonthRead
from .provider import ProviderRead


class WeekSummary(BaseModel):
    """Paid, remaining and progress figures for one week."""

    week_id: str
    month_id: str
    week_number: int
    credit_amount: Decimal
    total_paid: Decimal
    remaining: Decimal = Field(..., description="Negative when the week is over-paid")
    progress_pct: Decimal = Field(..., description="Not clamped; over 100 when over-paid")
    payments_count: int = Field(..., ge=0)


class MonthSummary(BaseModel):
    month: MonthRead
    weeks_count: int = Field(..., ge=0)
    total_payments: Decimal
    average_weekly_credit: Decimal
    remaining_credit: Decimal
    progress_pct: Decimal


class ProviderSummary(BaseModel):
    provider: ProviderRead
    total_payments: Decimal
    payments_count: int = Field(..., ge=0)
    average_payment: Decimal
    first_payment_date: Optional[date] = None
    last_payment_date: Optional[date] = None


class PaymentStats(BaseModel):
    total_amount: Decimal
    payments_count: int = Field(..., ge=0)
    average_payment: Decimal
    max_payment: Decimal
    min_payment: Decimal


class MonthTotalMismatch(BaseModel):
    """A month whose stored total no longer matches the sum of its weeks."""

    month_id: str
    name: str
    year: int
    stored_total: Decimal
    weeks_total: Decimal
    difference: Decimal


class PaymentTotal(BaseModel):
    """Sum of the payments recorded under one week or one month."""

    scope: str = Field(..., description="Either week or month")
    scope_id: str
    total: Decimal

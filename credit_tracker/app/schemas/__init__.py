"""Expose Pydantic schemas for convenient imports."""

from .common import MAX_PAYMENT_AMOUNT, EntityId, ListResponse
from .month import MonthBase, MonthCreate, MonthRead, MonthUpdate
from .payment import PaymentBase, PaymentCreate, PaymentRead, PaymentUpdate
from .provider import ProviderBase, ProviderCreate, ProviderRead, ProviderUpdate
from .relations import (
    MonthWithWeeks,
    PaymentWithDetails,
    ProviderWithPayments,
    WeekPayment,
    WeekWithMonth,
    WeekWithPayments,
)
from .summary import (
    MonthSummary,
    MonthTotalMismatch,
    PaymentStats,
    PaymentTotal,
    ProviderSummary,
    WeekSummary,
)
from .week import WeekBase, WeekCreate, WeekRead, WeekUpdate


class MonthListResponse(ListResponse[MonthRead]):
    pass


class WeekListResponse(ListResponse[WeekRead]):
    pass


class WeekWithPaymentsListResponse(ListResponse[WeekWithPayments]):
    pass


class ProviderListResponse(ListResponse[ProviderRead]):
    pass


class PaymentListResponse(ListResponse[PaymentRead]):
    pass


class PaymentWithDetailsListResponse(ListResponse[PaymentWithDetails]):
    pass


class MonthSummaryListResponse(ListResponse[MonthSummary]):
    pass


class ProviderSummaryListResponse(ListResponse[ProviderSummary]):
    pass


__all__ = [
    "MAX_PAYMENT_AMOUNT",
    "EntityId",
    "ListResponse",
    "MonthBase",
    "MonthCreate",
    "MonthListResponse",
    "MonthRead",
    "MonthSummary",
    "MonthSummaryListResponse",
    "MonthTotalMismatch",
    "MonthUpdate",
    "MonthWithWeeks",
    "PaymentBase",
    "PaymentCreate",
    "PaymentListResponse",
    "PaymentRead",
    "PaymentStats",
    "PaymentTotal",
    "PaymentUpdate",
    "PaymentWithDetails",
    "PaymentWithDetailsListResponse",
    "ProviderBase",
    "ProviderCreate",
    "ProviderListResponse",
    "ProviderRead",
    "ProviderSummary",
    "ProviderSummaryListResponse",
    "ProviderUpdate",
    "ProviderWithPayments",
    "WeekBase",
    "WeekCreate",
    "WeekListResponse",
    "WeekPayment",
    "WeekRead",
    "WeekSummary",
    "WeekUpdate",
    "WeekWithMonth",
    "WeekWithPayments",
    "WeekWithPaymentsListResponse",
]

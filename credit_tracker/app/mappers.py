"""Turn raw store records into typed read models.

Everything above the store works with these DTOs only, so a change in the
store's record shape is caught here instead of deep inside an aggregation.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from . import schemas
from .exceptions import StoreError

ModelT = TypeVar("ModelT", bound=BaseModel)


def to_model(model: Type[ModelT], record: Mapping) -> ModelT:
    try:
        return model.model_validate(dict(record))
    except PydanticValidationError as exc:
        raise StoreError(f"Store returned an unexpected {model.__name__} record") from exc


def to_models(model: Type[ModelT], records: Iterable[Mapping]) -> list[ModelT]:
    return [to_model(model, record) for record in records]


def to_month(record: Mapping) -> schemas.MonthRead:
    return to_model(schemas.MonthRead, record)


def to_week(record: Mapping) -> schemas.WeekRead:
    return to_model(schemas.WeekRead, record)


def to_provider(record: Mapping) -> schemas.ProviderRead:
    return to_model(schemas.ProviderRead, record)


def to_payment(record: Mapping) -> schemas.PaymentRead:
    return to_model(schemas.PaymentRead, record)


def to_week_with_payments(record: Mapping) -> schemas.WeekWithPayments:
    return to_model(schemas.WeekWithPayments, record)


def to_month_with_weeks(record: Mapping) -> schemas.MonthWithWeeks:
    return to_model(schemas.MonthWithWeeks, record)


def to_payment_with_details(record: Mapping) -> schemas.PaymentWithDetails:
    return to_model(schemas.PaymentWithDetails, record)


def to_provider_with_payments(record: Mapping) -> schemas.ProviderWithPayments:
    return to_model(schemas.ProviderWithPayments, record)

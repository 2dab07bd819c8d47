"""Schema-level checks applied to every payload before it reaches the store.

``validate`` never raises for bad input. It returns a :class:`ValidationResult`
holding either the cleaned payload or every failing field at once, so a form
can show all of its problems together. Callers that prefer exceptions use
``ValidationResult.unwrap()``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from . import schemas
from .exceptions import ValidationError

ROOT_FIELD = "__root__"
DATE_ORDER_MESSAGE = "end_date must be on or after start_date"
NULL_MESSAGE = "Field cannot be null"

_NULLABLE_FIELDS = frozenset({"description", "contact_info"})
_DATE_ADAPTER = TypeAdapter(date)


class EntityKind(str, enum.Enum):
    MONTH = "month"
    WEEK = "week"
    PROVIDER = "provider"
    PAYMENT = "payment"


_CREATE_SCHEMAS: dict[EntityKind, type[BaseModel]] = {
    EntityKind.MONTH: schemas.MonthCreate,
    EntityKind.WEEK: schemas.WeekCreate,
    EntityKind.PROVIDER: schemas.ProviderCreate,
    EntityKind.PAYMENT: schemas.PaymentCreate,
}

_UPDATE_SCHEMAS: dict[EntityKind, type[BaseModel]] = {
    EntityKind.MONTH: schemas.MonthUpdate,
    EntityKind.WEEK: schemas.WeekUpdate,
    EntityKind.PROVIDER: schemas.ProviderUpdate,
    EntityKind.PAYMENT: schemas.PaymentUpdate,
}


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    model: Optional[BaseModel] = None
    data: Optional[dict[str, Any]] = None
    errors: tuple[FieldError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_map(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def unwrap(self) -> dict[str, Any]:
        """Return the cleaned payload or raise :class:`ValidationError`."""

        if self.errors:
            raise ValidationError(self.error_map())
        return dict(self.data or {})


def _pydantic_errors(exc: PydanticValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ())) or ROOT_FIELD
        errors.append(FieldError(loc, error["msg"]))
    return errors


def _null_errors(payload: Mapping[str, Any], schema: type[BaseModel]) -> list[FieldError]:
    return [
        FieldError(name, NULL_MESSAGE)
        for name, value in payload.items()
        if value is None and name in schema.model_fields and name not in _NULLABLE_FIELDS
    ]


def _parse_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    try:
        return _DATE_ADAPTER.validate_python(value)
    except PydanticValidationError:
        return None


def _week_date_errors(payload: Mapping[str, Any]) -> list[FieldError]:
    start = _parse_date(payload.get("start_date"))
    end = _parse_date(payload.get("end_date"))
    if start is not None and end is not None and start > end:
        return [FieldError("end_date", DATE_ORDER_MESSAGE)]
    return []


def check_week_dates(start_date: date, end_date: date) -> None:
    """Raise when a week would end before it starts."""

    if start_date > end_date:
        raise ValidationError({"end_date": [DATE_ORDER_MESSAGE]})


def validate(
    kind: Union[EntityKind, str],
    payload: Union[Mapping[str, Any], BaseModel],
    *,
    partial: bool = False,
) -> ValidationResult:
    """Validate a create payload, or an update payload when ``partial`` is set."""

    kind = EntityKind(kind)
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    if not isinstance(payload, Mapping):
        return ValidationResult(errors=(FieldError(ROOT_FIELD, "Expected an object"),))

    schema = (_UPDATE_SCHEMAS if partial else _CREATE_SCHEMAS)[kind]
    raw = dict(payload)
    errors: list[FieldError] = []
    model: Optional[BaseModel] = None

    try:
        model = schema.model_validate(raw)
    except PydanticValidationError as exc:
        errors.extend(_pydantic_errors(exc))

    if partial:
        errors.extend(_null_errors(raw, schema))
    if kind is EntityKind.WEEK:
        errors.extend(_week_date_errors(raw))

    if errors or model is None:
        return ValidationResult(errors=tuple(errors))
    return ValidationResult(model=model, data=model.model_dump(exclude_unset=partial))

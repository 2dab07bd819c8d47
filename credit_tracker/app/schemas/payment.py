from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import MAX_PAYMENT_AMOUNT, EntityId


class PaymentBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    week_id: EntityId = Field(..., description="Week the payment belongs to")
    provider_id: EntityId = Field(..., description="Provider receiving the payment")
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_PAYMENT_AMOUNT,
        max_digits=12,
        decimal_places=2,
        description="Amount paid",
    )
    payment_date: date = Field(..., description="Date of the disbursement")
    description: Optional[str] = Field(default=None, max_length=200)


class PaymentCreate(PaymentBase):
    """Schema used to create new payments."""

    pass


class PaymentUpdate(BaseModel):
    """Schema used to update payments; every field is optional."""

    model_config = ConfigDict(str_strip_whitespace=True)

    week_id: Optional[EntityId] = None
    provider_id: Optional[EntityId] = None
    amount: Optional[Decimal] = Field(
        default=None, gt=0, le=MAX_PAYMENT_AMOUNT, max_digits=12, decimal_places=2
    )
    payment_date: Optional[date] = None
    description: Optional[str] = Field(default=None, max_length=200)


class PaymentRead(BaseModel):
    """Schema representing stored payments."""

    id: str
    week_id: str
    provider_id: str
    amount: Decimal
    payment_date: date
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

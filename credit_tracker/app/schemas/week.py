from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import EntityId


class WeekBase(BaseModel):
    month_id: EntityId = Field(..., description="Month owning the week")
    week_number: Optional[int] = Field(
        default=None,
        ge=1,
        description="Position inside the month; assigned automatically when omitted",
    )
    start_date: date = Field(..., description="First day covered by the week")
    end_date: date = Field(..., description="Last day covered by the week")
    credit_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=12,
        decimal_places=2,
        description="Credit allocated to the week",
    )


class WeekCreate(WeekBase):
    """Schema used to create new weeks."""

    pass


class WeekUpdate(BaseModel):
    """Schema used to update weeks; every field is optional."""

    month_id: Optional[EntityId] = None
    week_number: Optional[int] = Field(default=None, ge=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    credit_amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)


class WeekRead(BaseModel):
    """Schema representing stored weeks."""

    id: str
    month_id: str
    week_number: int
    start_date: date
    end_date: date
    credit_amount: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

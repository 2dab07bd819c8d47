from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MonthBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=50, description="Display name of the month")
    year: int = Field(..., ge=2020, le=2030, description="Calendar year")
    total_credit: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        max_digits=12,
        decimal_places=2,
        description="Rolled-up credit of the month's weeks",
    )


class MonthCreate(MonthBase):
    """Schema used to create new months."""

    pass


class MonthUpdate(BaseModel):
    """Schema used to update months; every field is optional."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    year: Optional[int] = Field(default=None, ge=2020, le=2030)
    total_credit: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)


class MonthRead(BaseModel):
    """Schema representing stored months."""

    id: str
    name: str
    year: int
    total_credit: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

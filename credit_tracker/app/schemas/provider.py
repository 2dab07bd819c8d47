from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProviderBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100, description="Provider name")
    description: Optional[str] = Field(default=None, max_length=500)
    contact_info: Optional[str] = Field(default=None, max_length=200)
    is_active: bool = True


class ProviderCreate(ProviderBase):
    """Schema used to create new providers."""

    pass


class ProviderUpdate(BaseModel):
    """Schema used to update providers; every field is optional."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    contact_info: Optional[str] = Field(default=None, max_length=200)
    is_active: Optional[bool] = None


class ProviderRead(BaseModel):
    """Schema representing stored providers."""

    id: str
    name: str
    description: Optional[str] = None
    contact_info: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

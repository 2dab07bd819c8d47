"""Expose SQLAlchemy models for convenient imports."""

from .month import Month
from .payment import Payment
from .provider import Provider
from .week import Week

__all__ = [
    "Month",
    "Payment",
    "Provider",
    "Week",
]

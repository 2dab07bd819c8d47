"""Routers package."""

from .months import router as months_router
from .payments import router as payments_router
from .providers import router as providers_router
from .weeks import router as weeks_router

__all__ = [
    "months_router",
    "payments_router",
    "providers_router",
    "weeks_router",
]

"""Service layer encapsulating business logic for API routers."""

from .months import MonthService
from .payments import PaymentService
from .providers import ProviderService
from .reconciliation import ReconciliationService
from .sequencing import SequencingService
from .summaries import SummaryService
from .weeks import WeekService

__all__ = [
    "MonthService",
    "PaymentService",
    "ProviderService",
    "ReconciliationService",
    "SequencingService",
    "SummaryService",
    "WeekService",
]

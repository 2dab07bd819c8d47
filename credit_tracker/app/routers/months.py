"""Router exposing month operations."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from .. import schemas
from ..services import MonthService, PaymentService, ReconciliationService, SummaryService
from ..store import Store
from .common import get_store, request_body, service_errors

router = APIRouter()


@router.get("", response_model=schemas.MonthListResponse)
def list_months(store: Store = Depends(get_store)) -> schemas.MonthListResponse:
    """Return every month, newest year first."""

    with service_errors():
        items = MonthService.list_months(store)
    return schemas.MonthListResponse(items=items, total=len(items))


@router.get("/summaries", response_model=schemas.MonthSummaryListResponse)
def list_month_summaries(store: Store = Depends(get_store)) -> schemas.MonthSummaryListResponse:
    with service_errors():
        items = SummaryService.month_summaries(store)
    return schemas.MonthSummaryListResponse(items=items, total=len(items))


@router.get("/consistency", response_model=list[schemas.MonthTotalMismatch])
def list_month_total_drift(store: Store = Depends(get_store)) -> list[schemas.MonthTotalMismatch]:
    """Report months whose stored total no longer matches their weeks."""

    with service_errors():
        return ReconciliationService.find_month_total_drift(store)


@router.post(
    "",
    response_model=schemas.MonthRead,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=request_body(schemas.MonthCreate),
)
def create_month(
    payload: dict[str, Any] = Body(...), store: Store = Depends(get_store)
) -> schemas.MonthRead:
    with service_errors():
        return MonthService.create_month(store, payload)


@router.get("/{month_id}", response_model=schemas.MonthRead)
def get_month(month_id: str, store: Store = Depends(get_store)) -> schemas.MonthRead:
    with service_errors():
        return MonthService.require_month(store, month_id)


@router.get("/{month_id}/summary", response_model=schemas.MonthSummary)
def get_month_summary(month_id: str, store: Store = Depends(get_store)) -> schemas.MonthSummary:
    with service_errors():
        return SummaryService.month_summary(store, month_id)


@router.get("/{month_id}/weeks/summaries", response_model=list[schemas.WeekSummary])
def list_week_summaries(
    month_id: str, store: Store = Depends(get_store)
) -> list[schemas.WeekSummary]:
    with service_errors():
        MonthService.require_month(store, month_id)
        return SummaryService.week_summaries(store, month_id)


@router.get("/{month_id}/payments/total", response_model=schemas.PaymentTotal)
def get_month_payments_total(
    month_id: str, store: Store = Depends(get_store)
) -> schemas.PaymentTotal:
    with service_errors():
        total = PaymentService.total_by_month(store, month_id)
    return schemas.PaymentTotal(scope="month", scope_id=month_id, total=total)


@router.patch(
    "/{month_id}",
    response_model=schemas.MonthRead,
    openapi_extra=request_body(schemas.MonthUpdate),
)
def update_month(
    month_id: str,
    payload: dict[str, Any] = Body(...),
    store: Store = Depends(get_store),
) -> schemas.MonthRead:
    with service_errors():
        return MonthService.update_month(store, month_id, payload)


@router.post("/{month_id}/recalculate", response_model=schemas.MonthRead)
def recalculate_month_total(month_id: str, store: Store = Depends(get_store)) -> schemas.MonthRead:
    """Rebuild ``total_credit`` from the month's weeks."""

    with service_errors():
        return ReconciliationService.recalculate_month_total(store, month_id)


@router.delete("/{month_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_month(month_id: str, store: Store = Depends(get_store)) -> None:
    with service_errors():
        MonthService.delete_month(store, month_id)

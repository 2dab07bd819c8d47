"""Router exposing week operations.

Every write here is followed by a month total recalculation so the stored
``total_credit`` of each affected month stays equal to the sum of its weeks.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from .. import schemas
from ..services import PaymentService, ReconciliationService, SummaryService, WeekService
from ..store import Store
from .common import get_store, request_body, service_errors

router = APIRouter()


@router.get("", response_model=schemas.WeekListResponse)
def list_weeks(
    month_id: str = Query(..., description="Month whose weeks are listed"),
    store: Store = Depends(get_store),
) -> schemas.WeekListResponse:
    with service_errors():
        items = WeekService.list_weeks(store, month_id)
    return schemas.WeekListResponse(items=items, total=len(items))


@router.get("/with-payments", response_model=schemas.WeekWithPaymentsListResponse)
def list_weeks_with_payments(
    month_id: str = Query(..., description="Month whose weeks are listed"),
    store: Store = Depends(get_store),
) -> schemas.WeekWithPaymentsListResponse:
    """Return the month's weeks with their payments and providers in one read."""

    with service_errors():
        items = WeekService.list_weeks_with_payments(store, month_id)
    return schemas.WeekWithPaymentsListResponse(items=items, total=len(items))


@router.get("/next-number")
def get_next_week_number(
    month_id: str = Query(..., description="Month the next week would belong to"),
    store: Store = Depends(get_store),
) -> dict[str, Any]:
    with service_errors():
        week_number = WeekService.next_week_number(store, month_id)
    return {"month_id": month_id, "week_number": week_number}


@router.post(
    "",
    response_model=schemas.WeekRead,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=request_body(schemas.WeekCreate),
)
def create_week(
    payload: dict[str, Any] = Body(...), store: Store = Depends(get_store)
) -> schemas.WeekRead:
    with service_errors():
        week = WeekService.create_week(store, payload)
        ReconciliationService.recalculate_month_total(store, week.month_id)
    return week


@router.get("/{week_id}", response_model=schemas.WeekWithMonth)
def get_week(week_id: str, store: Store = Depends(get_store)) -> schemas.WeekWithMonth:
    with service_errors():
        week = WeekService.get_week_with_month(store, week_id)
        if week is None:
            WeekService.require_week(store, week_id)
    return week


@router.get("/{week_id}/summary", response_model=schemas.WeekSummary)
def get_week_summary(week_id: str, store: Store = Depends(get_store)) -> schemas.WeekSummary:
    with service_errors():
        return SummaryService.week_summary(store, week_id)


@router.get("/{week_id}/payments", response_model=schemas.PaymentListResponse)
def list_week_payments(
    week_id: str, store: Store = Depends(get_store)
) -> schemas.PaymentListResponse:
    """Return the week's payments, most recent first."""

    with service_errors():
        WeekService.require_week(store, week_id)
        items = PaymentService.list_by_week(store, week_id)
    return schemas.PaymentListResponse(items=items, total=len(items))


@router.get("/{week_id}/payments/total", response_model=schemas.PaymentTotal)
def get_week_payments_total(
    week_id: str, store: Store = Depends(get_store)
) -> schemas.PaymentTotal:
    with service_errors():
        total = PaymentService.total_by_week(store, week_id)
    return schemas.PaymentTotal(scope="week", scope_id=week_id, total=total)


@router.patch(
    "/{week_id}",
    response_model=schemas.WeekRead,
    openapi_extra=request_body(schemas.WeekUpdate),
)
def update_week(
    week_id: str,
    payload: dict[str, Any] = Body(...),
    store: Store = Depends(get_store),
) -> schemas.WeekRead:
    with service_errors():
        previous = WeekService.require_week(store, week_id)
        week = WeekService.update_week(store, week_id, payload)
        ReconciliationService.recalculate_month_total(store, week.month_id)
        if previous.month_id != week.month_id:
            ReconciliationService.recalculate_month_total(store, previous.month_id)
    return week


@router.delete("/{week_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_week(week_id: str, store: Store = Depends(get_store)) -> None:
    with service_errors():
        week = WeekService.delete_week(store, week_id)
        ReconciliationService.recalculate_month_total(store, week.month_id)

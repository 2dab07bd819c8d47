"""Router exposing payment operations."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from .. import schemas
from ..services import PaymentService
from ..store import Store
from .common import get_store, request_body, service_errors

router = APIRouter()


@router.get("", response_model=schemas.PaymentWithDetailsListResponse)
def list_payments(
    week_id: Optional[str] = Query(None, description="Restrict to one week"),
    store: Store = Depends(get_store),
) -> schemas.PaymentWithDetailsListResponse:
    """Return payments with their provider, week and month."""

    with service_errors():
        items = PaymentService.list_with_details(store, week_id)
    return schemas.PaymentWithDetailsListResponse(items=items, total=len(items))


@router.get("/range", response_model=schemas.PaymentListResponse)
def list_payments_in_range(
    start_date: date = Query(..., description="First payment date included"),
    end_date: date = Query(..., description="Last payment date included"),
    store: Store = Depends(get_store),
) -> schemas.PaymentListResponse:
    with service_errors():
        items = PaymentService.list_by_date_range(store, start_date, end_date)
    return schemas.PaymentListResponse(items=items, total=len(items))


@router.get("/search", response_model=schemas.PaymentListResponse)
def search_payments(
    q: str = Query(..., min_length=1, description="Fragment of the description"),
    store: Store = Depends(get_store),
) -> schemas.PaymentListResponse:
    with service_errors():
        items = PaymentService.search_by_description(store, q)
    return schemas.PaymentListResponse(items=items, total=len(items))


@router.get("/stats", response_model=schemas.PaymentStats)
def get_payment_stats(
    week_id: Optional[str] = Query(None, description="Restrict to one week"),
    store: Store = Depends(get_store),
) -> schemas.PaymentStats:
    with service_errors():
        return PaymentService.payment_stats(store, week_id)


@router.post(
    "",
    response_model=schemas.PaymentRead,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=request_body(schemas.PaymentCreate),
)
def create_payment(
    payload: dict[str, Any] = Body(...), store: Store = Depends(get_store)
) -> schemas.PaymentRead:
    with service_errors():
        return PaymentService.create_payment(store, payload)


@router.get("/{payment_id}", response_model=schemas.PaymentWithDetails)
def get_payment(payment_id: str, store: Store = Depends(get_store)) -> schemas.PaymentWithDetails:
    with service_errors():
        payment = PaymentService.get_payment_with_details(store, payment_id)
        if payment is None:
            PaymentService.require_payment(store, payment_id)
    return payment


@router.patch(
    "/{payment_id}",
    response_model=schemas.PaymentRead,
    openapi_extra=request_body(schemas.PaymentUpdate),
)
def update_payment(
    payment_id: str,
    payload: dict[str, Any] = Body(...),
    store: Store = Depends(get_store),
) -> schemas.PaymentRead:
    with service_errors():
        return PaymentService.update_payment(store, payment_id, payload)


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment(payment_id: str, store: Store = Depends(get_store)) -> None:
    with service_errors():
        PaymentService.delete_payment(store, payment_id)

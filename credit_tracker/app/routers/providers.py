"""Router exposing provider operations."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from .. import schemas
from ..services import PaymentService, ProviderService
from ..store import Store
from .common import get_store, request_body, service_errors

router = APIRouter()


@router.get("", response_model=schemas.ProviderListResponse)
def list_providers(
    active_only: bool = Query(False, description="Only return active providers"),
    search: Optional[str] = Query(None, description="Case-insensitive name fragment"),
    store: Store = Depends(get_store),
) -> schemas.ProviderListResponse:
    with service_errors():
        items = ProviderService.list_providers(store, active_only=active_only, search=search)
    return schemas.ProviderListResponse(items=items, total=len(items))


@router.get("/stats", response_model=schemas.ProviderSummaryListResponse)
def list_provider_stats(store: Store = Depends(get_store)) -> schemas.ProviderSummaryListResponse:
    with service_errors():
        items = ProviderService.list_with_stats(store)
    return schemas.ProviderSummaryListResponse(items=items, total=len(items))


@router.post(
    "",
    response_model=schemas.ProviderRead,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=request_body(schemas.ProviderCreate),
)
def create_provider(
    payload: dict[str, Any] = Body(...), store: Store = Depends(get_store)
) -> schemas.ProviderRead:
    with service_errors():
        return ProviderService.create_provider(store, payload)


@router.get("/{provider_id}", response_model=schemas.ProviderRead)
def get_provider(provider_id: str, store: Store = Depends(get_store)) -> schemas.ProviderRead:
    with service_errors():
        return ProviderService.require_provider(store, provider_id)


@router.get("/{provider_id}/stats", response_model=schemas.ProviderSummary)
def get_provider_stats(
    provider_id: str, store: Store = Depends(get_store)
) -> schemas.ProviderSummary:
    with service_errors():
        return ProviderService.provider_stats(store, provider_id)


@router.get("/{provider_id}/payments", response_model=schemas.PaymentListResponse)
def list_provider_payments(
    provider_id: str, store: Store = Depends(get_store)
) -> schemas.PaymentListResponse:
    with service_errors():
        ProviderService.require_provider(store, provider_id)
        items = PaymentService.list_by_provider(store, provider_id)
    return schemas.PaymentListResponse(items=items, total=len(items))


@router.patch(
    "/{provider_id}",
    response_model=schemas.ProviderRead,
    openapi_extra=request_body(schemas.ProviderUpdate),
)
def update_provider(
    provider_id: str,
    payload: dict[str, Any] = Body(...),
    store: Store = Depends(get_store),
) -> schemas.ProviderRead:
    with service_errors():
        return ProviderService.update_provider(store, provider_id, payload)


@router.put("/{provider_id}/active", response_model=schemas.ProviderRead)
def set_provider_active(
    provider_id: str,
    is_active: bool = Query(..., description="New activation flag"),
    store: Store = Depends(get_store),
) -> schemas.ProviderRead:
    with service_errors():
        return ProviderService.toggle_active(store, provider_id, is_active)


@router.delete("/{provider_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_provider(provider_id: str, store: Store = Depends(get_store)) -> None:
    with service_errors():
        ProviderService.delete_provider(store, provider_id)

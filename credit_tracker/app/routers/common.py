"""Shared router plumbing: store dependency and error translation."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Generator, Iterator

from fastapi import Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..exceptions import (
    ConcurrencyError,
    ConstraintViolation,
    CreditTrackerError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ..store import SqlAlchemyStore, Store

LOGGER = logging.getLogger(__name__)


def get_store(db: Session = Depends(get_db)) -> Generator[Store, None, None]:
    """Yield the store bound to the request's database session."""

    yield SqlAlchemyStore(db)


def request_body(model: type[BaseModel]) -> dict[str, Any]:
    """Document ``model`` as the JSON body of a route that takes a raw payload.

    The routes hand the raw body to the validation layer, so FastAPI only
    needs the schema for the OpenAPI document.
    """

    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


def to_http_exception(exc: CreditTrackerError) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": exc.errors},
        )
    if isinstance(exc, NotFoundError):
        if exc.field:
            return HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"errors": {exc.field: [str(exc)]}},
            )
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, (ConstraintViolation, ConcurrencyError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, StoreError):
        LOGGER.exception("Store failure", exc_info=exc)
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="The data store is unavailable, try again later",
        )
    LOGGER.exception("Unexpected service failure", exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unexpected error"
    )


@contextmanager
def service_errors() -> Iterator[None]:
    """Translate service exceptions raised inside the block into HTTP errors."""

    try:
        yield
    except CreditTrackerError as exc:
        raise to_http_exception(exc) from exc

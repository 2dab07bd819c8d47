"""FastAPI application package."""

from __future__ import annotations


def get_app():
    """Return the FastAPI application without importing it eagerly.

    Alembic imports this package to reach the models; it must not pull in
    the routers and the app while doing so.
    """

    from .main import app as fastapi_app

    return fastapi_app


__all__ = ["get_app"]

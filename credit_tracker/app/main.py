"""Expose the credit tracker FastAPI app."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import allowed_origins, read_bool_env
from .migrations import run_database_migrations
from .routers import months_router, payments_router, providers_router, weeks_router

LOGGER = logging.getLogger(__name__)

RUN_MIGRATIONS_ENV = "RUN_MIGRATIONS_ON_STARTUP"
LOCALHOST_ORIGIN_REGEX = r"https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$"


def ensure_database_is_ready() -> None:
    """Apply pending database migrations unless disabled."""

    if not read_bool_env(RUN_MIGRATIONS_ENV, True):
        LOGGER.info("Skipping migrations, disabled via %s", RUN_MIGRATIONS_ENV)
        return
    run_database_migrations()


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_database_is_ready()
    yield


app = FastAPI(title="Credit Tracker API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_origin_regex=LOCALHOST_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(months_router, prefix="/months", tags=["months"])
app.include_router(weeks_router, prefix="/weeks", tags=["weeks"])
app.include_router(providers_router, prefix="/providers", tags=["providers"])
app.include_router(payments_router, prefix="/payments", tags=["payments"])


@app.get("/", tags=["health"])
def read_root() -> dict[str, str]:
    """Return a simple health check response."""
    return {"status": "ok"}

"""Environment-driven settings for the credit tracker backend."""

from __future__ import annotations

import os
import re

WEEK_NUMBER_ATTEMPTS_ENV = "CREDIT_TRACKER_WEEK_NUMBER_ATTEMPTS"
DEFAULT_WEEK_NUMBER_ATTEMPTS = 3


def read_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return value


def read_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return value


def read_bool_env(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def week_number_max_attempts() -> int:
    """Return how many times a week insert is retried after a number collision."""

    attempts = read_int_env(WEEK_NUMBER_ATTEMPTS_ENV, DEFAULT_WEEK_NUMBER_ATTEMPTS)
    if attempts < 1:
        raise ValueError(f"{WEEK_NUMBER_ATTEMPTS_ENV} must be at least 1")
    return attempts


ALLOWED_ORIGINS_ENV = "BACKEND_ALLOWED_ORIGINS"
DEV_SERVER_ORIGINS = ("http://localhost:5173", "http://localhost:5174")
DEFAULT_ALLOWED_ORIGINS = (
    *DEV_SERVER_ORIGINS,
    "http://127.0.0.1:5173",
    "http://127.0.0.1:5174",
    "http://localhost:4173",
    "http://127.0.0.1:4173",
)


def split_origins(raw_value: str) -> list[str]:
    """Split an origin list separated by commas, spaces or both."""

    return [origin for origin in re.split(r"[\s,]+", raw_value) if origin]


def allowed_origins() -> list[str]:
    """CORS origins from the environment, always including the local dev servers."""

    raw_value = os.getenv(ALLOWED_ORIGINS_ENV)
    configured = split_origins(raw_value) if raw_value else list(DEFAULT_ALLOWED_ORIGINS)
    origins = {origin.rstrip("/") for origin in configured}
    origins.update(DEV_SERVER_ORIGINS)
    return sorted(origins)

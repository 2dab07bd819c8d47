"""SQLAlchemy engine, session factory and declarative base."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import read_int_env

DEFAULT_SQLITE_FILE = Path(__file__).resolve().parent.parent / "credit_tracker.db"

# (create_engine keyword, environment variable, default) for server databases.
POOL_SETTINGS = (
    ("pool_size", "DATABASE_POOL_SIZE", 5),
    ("max_overflow", "DATABASE_MAX_OVERFLOW", 10),
    ("pool_timeout", "DATABASE_POOL_TIMEOUT", 30),
    ("pool_recycle", "DATABASE_POOL_RECYCLE", 1800),
)
CONNECT_TIMEOUT_ENV = "DATABASE_CONNECT_TIMEOUT"


def database_url_from_env(raw_url: str | None = None) -> str:
    """Normalise DATABASE_URL, creating the folder of a file-backed SQLite database."""

    if not raw_url:
        DEFAULT_SQLITE_FILE.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{DEFAULT_SQLITE_FILE.as_posix()}"

    url = make_url(raw_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return url.render_as_string(hide_password=False)


def engine_options(database_url: str) -> Dict[str, Any]:
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    options: Dict[str, Any] = {
        keyword: read_int_env(env_name, default) for keyword, env_name, default in POOL_SETTINGS
    }
    options["pool_pre_ping"] = True
    options["connect_args"] = {"connect_timeout": read_int_env(CONNECT_TIMEOUT_ENV, 10)}
    return options


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses unless asked per connection.
    if not type(dbapi_connection).__module__.startswith(("sqlite3", "pysqlite2")):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


SQLALCHEMY_DATABASE_URL = database_url_from_env(os.getenv("DATABASE_URL"))

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_options(SQLALCHEMY_DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False)

Base = declarative_base()


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for scripts: commit on success, roll back on error."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

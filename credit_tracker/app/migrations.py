"""Bring the database schema to the latest Alembic revision at startup."""

from __future__ import annotations

import errno
import logging
import os
import sys
import time
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from .config import read_float_env
from .database import SQLALCHEMY_DATABASE_URL

LOGGER = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent
LOCK_PATH = PACKAGE_DIR / ".alembic-migration.lock"
LOCK_POLL_SECONDS = 0.25
LOCK_TIMEOUT_ENV = "ALEMBIC_MIGRATION_LOCK_TIMEOUT"
DEFAULT_LOCK_TIMEOUT = 30.0

EXPECTED_TABLES = frozenset({"months", "weeks", "providers", "payments"})

if os.name == "posix":  # pragma: no cover - platform specific
    import fcntl
else:  # pragma: no cover - platform specific
    import msvcrt

# errno values and Windows error codes meaning "someone else holds the lock".
_BUSY_ERRNOS = {errno.EACCES, errno.EAGAIN, errno.EBUSY}
_BUSY_WINERRORS = {32, 33}


def lock_timeout() -> float:
    return read_float_env(LOCK_TIMEOUT_ENV, DEFAULT_LOCK_TIMEOUT)


class MigrationLock:
    """Exclusive file lock so concurrent workers never migrate at the same time."""

    def __init__(self, path: Path, timeout: float):
        self.path = path
        self.timeout = timeout
        self._handle = None

    def _try_lock(self) -> bool:
        try:
            if os.name == "posix":  # pragma: no cover - platform specific
                fcntl.flock(self._handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
            else:  # pragma: no cover - platform specific
                msvcrt.locking(self._handle.fileno(), msvcrt.LK_NBLCK, 1)
        except BlockingIOError:
            return False
        except OSError as error:
            if error.errno in _BUSY_ERRNOS or getattr(error, "winerror", None) in _BUSY_WINERRORS:
                return False
            raise
        return True

    def __enter__(self) -> "MigrationLock":
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.path.open("a+")
        deadline = time.monotonic() + self.timeout
        while not self._try_lock():
            if time.monotonic() >= deadline:
                self._handle.close()
                raise TimeoutError(f"Timed out waiting for migration lock {self.path}")
            time.sleep(LOCK_POLL_SECONDS)
        LOGGER.debug("Holding migration lock %s", self.path)
        return self

    def __exit__(self, *exc_info) -> None:
        try:
            if os.name == "posix":  # pragma: no cover - platform specific
                fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
            else:  # pragma: no cover - platform specific
                msvcrt.locking(self._handle.fileno(), msvcrt.LK_UNLCK, 1)
        finally:
            self._handle.close()
            self._handle = None


def _alembic_config(database_url: str) -> Config:
    config = Config(str(PACKAGE_DIR / "alembic.ini"))
    config.set_main_option("script_location", str(PACKAGE_DIR / "alembic"))
    config.set_main_option("sqlalchemy.url", database_url)
    return config


def _existing_tables(database_url: str) -> tuple[bool, set[str]]:
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    engine = create_engine(database_url, connect_args=connect_args)
    try:
        names = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    return "alembic_version" in names, names - {"alembic_version"}


def run_database_migrations() -> None:
    """Upgrade to head, or stamp head when the tables were created without Alembic."""

    project_root = str(PACKAGE_DIR.parent)
    if project_root not in sys.path:
        sys.path.insert(0, project_root)

    database_url = os.getenv("DATABASE_URL") or SQLALCHEMY_DATABASE_URL
    config = _alembic_config(database_url)
    LOGGER.info("Running database migrations at %s", database_url)

    with MigrationLock(LOCK_PATH, lock_timeout()):
        versioned, tables = _existing_tables(database_url)
        if not versioned and EXPECTED_TABLES <= tables:
            LOGGER.info("Schema exists without Alembic metadata; stamping head")
            command.stamp(config, "head")
            return
        command.upgrade(config, "head")

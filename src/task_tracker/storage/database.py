# src/task_tracker/storage/database.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from ..errors import StorageError

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


class Database:
    """
    Handle to a provisioned SQLite database file.

    Each unit of work gets its own short-lived connection:
    - commit on success, rollback on failure, always close
    - sqlite3.Error is re-raised as StorageError (original chained)

    Nothing is cached between calls, so one Database can be shared by several
    repositories and threads.
    """

    def __init__(self, path: str | Path, *, timeout: float = 30.0) -> None:
        self._path = Path(path)
        self._timeout = float(timeout)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"Database(path={str(self._path)!r})"

    def _connect(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self._path), timeout=self._timeout)
        except sqlite3.Error as exc:
            logger.error("Cannot open database %s: %s", self._path, exc)
            raise StorageError(f"Cannot open database {self._path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        return conn

    @contextlib.contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            logger.error("Storage failure on %s: %s", self._path, exc)
            raise StorageError(str(exc)) from exc
        except BaseException:
            with contextlib.suppress(sqlite3.Error):
                conn.rollback()
            raise
        finally:
            conn.close()

    def apply_schema(self, script: str) -> None:
        """Run a SQL script (DDL) in one go."""
        with self.connection() as conn:
            conn.executescript(script)
        logger.debug("Schema applied to %s", self._path)

    def init_schema(self) -> None:
        """Provision the bundled tasks schema (idempotent)."""
        self.apply_schema(SCHEMA_PATH.read_text(encoding="utf-8"))
        logger.info("Database ready db=%s", self._path)

# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.storage.database import Database
from task_tracker.tasks.task_repository import TaskRepository


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap/CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="WARNING",
        log_dir=tmp_path / "logs",
        data_dir=tmp_path,
        db_path=tmp_path / "tasks.sqlite3",
        db_timeout=5.0,
        newest_default=2,
    )


@pytest.fixture()
def database(settings: SimpleNamespace) -> Database:
    """A disposable, provisioned database file per test."""
    db = Database(settings.db_path, timeout=settings.db_timeout)
    db.init_schema()
    return db


@pytest.fixture()
def repository(database: Database) -> TaskRepository:
    repo = TaskRepository(database)
    repo.delete_all()
    return repo

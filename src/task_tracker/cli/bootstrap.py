# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- provisions the database schema,
- wires the Database into a TaskRepository.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..storage.database import Database
from ..tasks.task_repository import TaskRepository

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_repository(*, settings=None) -> TaskRepository:
    """
    Build a ready-to-use TaskRepository from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    database = Database(settings.db_path, timeout=getattr(settings, "db_timeout", 30.0))
    database.init_schema()

    repository = TaskRepository(database)
    logger.info("TaskRepository ready db=%s total=%s", database.path, repository.count())
    return repository

# src/task_tracker/tasks/task_rows.py

"""
Row <-> Task mapping.

Pure functions only: nothing here touches a connection, so the mapping can be
tested against plain dicts.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .task_models import Task


def format_created_date(value: datetime) -> str:
    """
    Encode a timestamp verbatim as fixed-width ISO text (YYYY-MM-DDTHH:MM:SS.ffffff).

    Fixed width keeps ORDER BY created_date chronological.
    """
    if value.tzinfo is not None:
        raise ValueError("created_date must be a naive local datetime")
    return value.isoformat(timespec="microseconds")


def parse_created_date(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(f"Invalid created_date value: {raw!r}")
    return datetime.fromisoformat(raw.strip())


def row_to_task(row: Mapping[str, Any]) -> Task:
    return Task(
        id=int(row["id"]),
        title=str(row["title"]),
        finished=bool(row["finished"]),
        created_date=parse_created_date(row["created_date"]),
    )


def task_to_params(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "finished": 1 if task.finished else 0,
        "created_date": format_created_date(task.created_date),
    }

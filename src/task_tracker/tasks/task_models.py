# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision (the default for new tasks)."""
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)


def _now_millis() -> datetime:
    return truncate_to_millis(datetime.now())


@dataclass(slots=True)
class Task:
    """
    A to-do item.

    Notes:
    - id is None until the task is saved; the repository assigns it.
    - created_date is a naive local timestamp chosen by the caller and stored verbatim.
    """

    title: str
    finished: bool = False
    created_date: datetime = field(default_factory=_now_millis)
    id: int | None = None

    @classmethod
    def new(
        cls,
        title: str,
        *,
        finished: bool = False,
        created_date: datetime | None = None,
    ) -> Task:
        if created_date is None:
            created_date = _now_millis()
        return cls(title=title, finished=finished, created_date=created_date)

    @property
    def is_saved(self) -> bool:
        return self.id is not None

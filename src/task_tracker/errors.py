# src/task_tracker/errors.py

"""
Error types raised by the task tracker.

Lookups that find nothing return None; only genuine failures raise.
"""

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for all task tracker errors."""


class StorageError(TaskTrackerError):
    """The storage backend failed (connection, statement, constraint)."""


class TaskNotFoundError(TaskTrackerError):
    """A mutation targeted a task id that has no row."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found: id={task_id}")
        self.task_id = task_id

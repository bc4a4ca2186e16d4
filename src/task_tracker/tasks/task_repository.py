# src/task_tracker/tasks/task_repository.py

from __future__ import annotations

import logging

from ..errors import StorageError, TaskNotFoundError
from ..storage.database import Database
from .task_models import Task
from .task_rows import row_to_task, task_to_params

logger = logging.getLogger(__name__)

_COLUMNS = "id, title, finished, created_date"


class TaskRepository:
    """
    Data access for the tasks table.

    Every method is one unit of work on a fresh connection from the injected
    Database. No state is kept between calls and nothing is cached: each read
    re-queries storage and returns new Task values.

    Failures:
    - StorageError from the backend propagates unchanged (no retries)
    - TaskNotFoundError when a mutation targets a missing row
    - ValueError for caller mistakes (e.g. finishing an unsaved task)
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    @property
    def database(self) -> Database:
        return self._db

    # ---- writes ----

    def save(self, task: Task) -> Task:
        """
        Persist a task and return it.

        New task (id is None): INSERT, then read the generated key back onto
        task.id. The two steps share one connection but are not part of any
        larger transaction.

        Saved task: UPDATE title and created_date of its row. The finished
        flag only changes through finish_task, so the stored value is read
        back onto the task.
        """
        if task.id is not None:
            return self._update(task, int(task.id))

        params = task_to_params(task)
        with self._db.connection() as conn:
            cur = conn.execute(
                """
                INSERT INTO tasks(title, finished, created_date)
                VALUES (:title, :finished, :created_date)
                """,
                params,
            )
            rowid = cur.lastrowid
        if rowid is None:
            raise StorageError("SQLite did not return lastrowid for tasks insert")

        task.id = int(rowid)
        logger.debug("Task saved id=%s title=%r", task.id, task.title)
        return task

    def _update(self, task: Task, task_id: int) -> Task:
        params = task_to_params(task)
        with self._db.connection() as conn:
            cur = conn.execute(
                """
                UPDATE tasks
                SET title = :title,
                    created_date = :created_date
                WHERE id = :id
                """,
                params,
            )
            updated = cur.rowcount
            row = conn.execute("SELECT finished FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if updated == 0 or row is None:
            raise TaskNotFoundError(task_id)
        task.finished = bool(row["finished"])
        logger.debug("Task updated id=%s", task_id)
        return task

    def finish_task(self, task: Task) -> Task:
        """Mark the task finished in storage and on the passed object."""
        if task.id is None:
            raise ValueError("Cannot finish a task that has not been saved")

        with self._db.connection() as conn:
            cur = conn.execute("UPDATE tasks SET finished = 1 WHERE id = ?", (int(task.id),))
            updated = cur.rowcount
        if updated == 0:
            raise TaskNotFoundError(int(task.id))

        task.finished = True
        logger.debug("Task finished id=%s", task.id)
        return task

    def delete_by_id(self, task_id: int) -> int:
        """Delete one row; returns 0 when the id did not exist."""
        with self._db.connection() as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            deleted = cur.rowcount
        logger.debug("Task delete id=%s deleted=%s", task_id, deleted)
        return deleted

    def delete_all(self) -> int:
        with self._db.connection() as conn:
            cur = conn.execute("DELETE FROM tasks")
            deleted = cur.rowcount
        logger.debug("Tasks deleted: %s", deleted)
        return deleted

    # ---- reads ----

    def get_by_id(self, task_id: int) -> Task | None:
        with self._db.connection() as conn:
            row = conn.execute(
                f"SELECT {_COLUMNS} FROM tasks WHERE id = ?",
                (int(task_id),),
            ).fetchone()
        return row_to_task(row) if row else None

    def find_all(self) -> list[Task]:
        with self._db.connection() as conn:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM tasks ORDER BY id ASC").fetchall()
        return [row_to_task(r) for r in rows]

    def find_all_not_finished(self) -> list[Task]:
        with self._db.connection() as conn:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM tasks WHERE finished = 0 ORDER BY id ASC"
            ).fetchall()
        return [row_to_task(r) for r in rows]

    def find_newest_tasks(self, n: int) -> list[Task]:
        """
        Return up to n tasks, newest created_date first.

        Equal timestamps are ordered by id DESC so repeated calls agree.
        """
        limit = int(n)
        if limit < 0:
            raise ValueError("n must be >= 0")
        if limit == 0:
            return []

        with self._db.connection() as conn:
            rows = conn.execute(
                f"""
                SELECT {_COLUMNS}
                FROM tasks
                ORDER BY created_date DESC, id DESC
                    LIMIT ?
                """,
                (limit,),
            ).fetchall()
        return [row_to_task(r) for r in rows]

    def count(self) -> int:
        with self._db.connection() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
        return int(n)

# src/task_tracker/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tasks.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console filter for the task CLI.

    Command replies are printed on stdout; stderr only carries our own
    records (repository, database, cli). Anything else, including captured
    warnings, reaches the console only at ERROR.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("task_tracker.") or record.name == "__main__":
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasks",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route task_tracker records to stderr (filtered) and to <log_dir>/tasks.log.

    The file keeps every repository statement logged at DEBUG. Repeated calls
    replace the root handlers. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    task_log = logging.FileHandler(str(log_file), encoding="utf-8")
    task_log.setLevel(file_level)
    task_log.setFormatter(fmt)
    root.addHandler(task_log)

    logging.captureWarnings(True)
    return log_file

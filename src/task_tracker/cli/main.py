# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the repository, then either:
- runs one command from argv (`task-tracker add buy milk`), or
- starts the interactive console when no arguments are given.
"""

from __future__ import annotations

import logging
import sys

from ..config import get_settings
from ..errors import StorageError
from ..logging_setup import setup_logging
from .bootstrap import create_repository
from .commands import CommandContext
from .commands import registry as command_registry
from .console import run_console_loop

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None, *, settings=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    # Command output goes to stdout; keep INFO chatter in the log file.
    setup_logging(log_dir=settings.log_dir, console_level=max(console_level, logging.WARNING))

    logger.info("Starting %s...", getattr(settings, "app_name", "task-tracker"))

    try:
        repository = create_repository(settings=settings)
    except StorageError as e:
        logger.exception("Failed to open task database.")
        print(f"Cannot open task database: {e}", file=sys.stderr)
        return 1

    ctx = CommandContext(repository=repository, settings=settings)

    if argv:
        result = command_registry.run(ctx, argv[0], argv[1:])
        if not result.ok:
            print(result.text, file=sys.stderr)
            return 1
        print(result.text)
        return 0

    run_console_loop(ctx)
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

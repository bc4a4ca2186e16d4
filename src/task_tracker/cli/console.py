# src/task_tracker/cli/console.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from .commands import CommandContext
from .commands import registry as command_registry

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(ctx: CommandContext, *, read_line: Callable[[str], str] = input) -> None:
    """Interactive loop: one slash command per line until /exit or EOF."""
    logger.info("Console started db=%s", ctx.repository.database.path)
    _print_ts("Type commands. Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            line = read_line(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        # Bare text is a shortcut for /add.
        if not line.startswith("/"):
            line = f"/add {line}"

        try:
            reply = command_registry.handle(ctx, line)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            _print_ts(reply)

    logger.info("Console finished.")

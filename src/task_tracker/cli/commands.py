# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..errors import StorageError, TaskNotFoundError
from ..tasks.task_models import Task
from ..tasks.task_repository import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandContext:
    repository: TaskRepository
    settings: Any = None

    @property
    def newest_default(self) -> int:
        return int(getattr(self.settings, "newest_default", 5) or 5)


CommandHandler = Callable[[CommandContext, list[str]], str]


class CommandError(Exception):
    """Raised by a handler to reply with a usage or lookup failure."""


@dataclass(frozen=True, slots=True)
class CommandResult:
    text: str
    ok: bool = True


class CommandRegistry:
    """Simple slash-command registry used by the console loop and the CLI entry point."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, ctx: CommandContext, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        return self.dispatch(ctx, parts[0], parts[1:])

    def dispatch(self, ctx: CommandContext, name: str, args: list[str]) -> str:
        return self.run(ctx, name, args).text

    def run(self, ctx: CommandContext, name: str, args: list[str]) -> CommandResult:
        """
        Run a command by name.

        Failures (unknown command, bad input, missing task, storage error)
        come back as replies with ok=False; storage errors are logged too.
        """
        name = name.lower().lstrip("/")
        handler = self._handlers.get(name)
        if not handler:
            return CommandResult(
                f"Unknown command: /{name}. Use /help to list available commands.", ok=False
            )

        try:
            return CommandResult(handler(ctx, args))
        except CommandError as e:
            return CommandResult(str(e), ok=False)
        except TaskNotFoundError as e:
            return CommandResult(f"No task with id {e.task_id}.", ok=False)
        except ValueError as e:
            return CommandResult(f"Invalid input: {e}", ok=False)
        except StorageError as e:
            logger.exception("Command /%s failed on storage.", name)
            return CommandResult(f"Storage error: {e}", ok=False)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(task: Task) -> str:
    mark = "x" if task.finished else " "
    created = task.created_date.strftime("%Y-%m-%d %H:%M:%S")
    return f"#{task.id} [{mark}] {created}  {task.title}"


def _format_list(tasks: list[Task], empty: str) -> str:
    if not tasks:
        return empty
    return "\n".join(format_task(t) for t in tasks)


def _parse_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def cmd_help(ctx: CommandContext, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(ctx: CommandContext, args: list[str]) -> str:
    title = " ".join(args).strip()
    if not title:
        raise CommandError("Usage: /add <title>")
    task = ctx.repository.save(Task.new(title))
    return f"Added {format_task(task)}"


def cmd_list(ctx: CommandContext, args: list[str]) -> str:
    return _format_list(ctx.repository.find_all(), "No tasks.")


def cmd_open(ctx: CommandContext, args: list[str]) -> str:
    return _format_list(ctx.repository.find_all_not_finished(), "No open tasks.")


def cmd_newest(ctx: CommandContext, args: list[str]) -> str:
    """
    /newest     -> newest tasks (default count from settings)
    /newest N   -> N newest tasks
    """
    if not args:
        n = ctx.newest_default
    else:
        try:
            n = int(args[0])
        except ValueError:
            raise CommandError("Usage: /newest [n]") from None
    return _format_list(ctx.repository.find_newest_tasks(n), "No tasks.")


def cmd_show(ctx: CommandContext, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        raise CommandError("Usage: /show <id>")
    task = ctx.repository.get_by_id(task_id)
    if task is None:
        raise CommandError(f"No task with id {task_id}.")
    return format_task(task)


def cmd_finish(ctx: CommandContext, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        raise CommandError("Usage: /finish <id>")
    task = ctx.repository.get_by_id(task_id)
    if task is None:
        raise CommandError(f"No task with id {task_id}.")
    if task.finished:
        return f"Already finished: {format_task(task)}"
    return f"Finished {format_task(ctx.repository.finish_task(task))}"


def cmd_delete(ctx: CommandContext, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        raise CommandError("Usage: /delete <id>")
    if ctx.repository.delete_by_id(task_id) == 0:
        raise CommandError(f"No task with id {task_id}.")
    return f"Deleted task {task_id}."


def cmd_clear(ctx: CommandContext, args: list[str]) -> str:
    deleted = ctx.repository.delete_all()
    return f"Deleted {deleted} task(s)."


def cmd_count(ctx: CommandContext, args: list[str]) -> str:
    return f"Total tasks: {ctx.repository.count()}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <title>.")
registry.register("list", cmd_list, help_text="List all tasks.", aliases=["ls"])
registry.register("open", cmd_open, help_text="List unfinished tasks.", aliases=["todo"])
registry.register("newest", cmd_newest, help_text="Newest tasks first: /newest [n].")
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("finish", cmd_finish, help_text="Mark a task finished: /finish <id>.", aliases=["done"])
registry.register("delete", cmd_delete, help_text="Delete one task: /delete <id>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Delete all tasks.")
registry.register("count", cmd_count, help_text="Show the number of tasks.")

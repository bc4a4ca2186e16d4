# tests/test_commands.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from task_tracker.cli.commands import CommandContext, CommandRegistry, registry
from task_tracker.cli.console import run_console_loop
from task_tracker.errors import StorageError, TaskNotFoundError
from task_tracker.tasks.task_models import Task


@pytest.fixture()
def ctx(repository, settings) -> CommandContext:
    return CommandContext(repository=repository, settings=settings)


def test_command_registry_unknown_and_non_command(ctx) -> None:
    reg = CommandRegistry()
    assert reg.handle(ctx, "hello") is None
    assert "Unknown command" in (reg.handle(ctx, "/nope") or "")
    assert "Empty command" in (reg.handle(ctx, "/") or "")


def test_command_registry_aliases_and_error_replies(ctx) -> None:
    reg = CommandRegistry()

    def missing(ctx, args):
        raise TaskNotFoundError(3)

    def broken(ctx, args):
        raise StorageError("disk I/O error")

    reg.register("missing", missing, "m", aliases=["M2"])
    reg.register("broken", broken, "b")

    assert reg.handle(ctx, "/m2") == "No task with id 3."
    assert reg.handle(ctx, "/broken") == "Storage error: disk I/O error"


def test_add_list_finish_delete_flow(ctx) -> None:
    reply = registry.handle(ctx, "/add buy milk")
    assert reply is not None and reply.startswith("Added #")
    task_id = ctx.repository.find_all()[0].id

    assert "buy milk" in (registry.handle(ctx, "/list") or "")
    assert "buy milk" in (registry.handle(ctx, "/open") or "")

    assert (registry.handle(ctx, f"/finish {task_id}") or "").startswith("Finished")
    assert registry.handle(ctx, "/open") == "No open tasks."
    assert (registry.handle(ctx, f"/done {task_id}") or "").startswith("Already finished")

    assert registry.handle(ctx, f"/delete {task_id}") == f"Deleted task {task_id}."
    assert registry.handle(ctx, f"/delete {task_id}") == f"No task with id {task_id}."
    assert registry.handle(ctx, "/list") == "No tasks."


def test_show_and_usage_messages(ctx) -> None:
    assert registry.handle(ctx, "/show") == "Usage: /show <id>"
    assert registry.handle(ctx, "/finish abc") == "Usage: /finish <id>"
    assert registry.handle(ctx, "/show 99") == "No task with id 99."
    assert registry.handle(ctx, "/add") == "Usage: /add <title>"


def test_newest_uses_settings_default(ctx) -> None:
    now = datetime(2024, 6, 1, 12, 0, 0)
    for days in (3, 2, 1):
        ctx.repository.save(Task(f"{days} days ago", False, now - timedelta(days=days)))

    lines = (registry.dispatch(ctx, "newest", []) or "").splitlines()
    assert len(lines) == 2
    assert "1 days ago" in lines[0]
    assert "2 days ago" in lines[1]

    assert len(registry.dispatch(ctx, "newest", ["3"]).splitlines()) == 3
    assert registry.dispatch(ctx, "newest", ["-1"]).startswith("Invalid input")


def test_clear_and_count(ctx) -> None:
    registry.handle(ctx, "/add one")
    registry.handle(ctx, "/add two")

    assert registry.handle(ctx, "/count") == "Total tasks: 2"
    assert registry.handle(ctx, "/clear") == "Deleted 2 task(s)."
    assert registry.handle(ctx, "/count") == "Total tasks: 0"


def test_console_loop_runs_commands_until_exit(ctx, capsys) -> None:
    lines = iter(["", "water plants", "/count", "/exit", "/add never reached"])

    run_console_loop(ctx, read_line=lambda _prompt: next(lines))

    out = capsys.readouterr().out
    assert "Added #" in out
    assert "Total tasks: 1" in out
    assert [t.title for t in ctx.repository.find_all()] == ["water plants"]


def test_console_loop_stops_on_eof(ctx) -> None:
    def read_line(_prompt: str) -> str:
        raise EOFError

    run_console_loop(ctx, read_line=read_line)


def test_run_reports_failures(ctx) -> None:
    added = registry.run(ctx, "add", ["ship", "it"])
    assert added.ok is True

    assert registry.run(ctx, "show", ["99"]).ok is False
    assert registry.run(ctx, "delete", ["99"]).ok is False
    assert registry.run(ctx, "finish", ["abc"]).ok is False
    assert registry.run(ctx, "newest", ["-1"]).ok is False
    assert registry.run(ctx, "nope", []).ok is False
    assert registry.run(ctx, "list", []).ok is True


def test_run_reports_storage_error(ctx, monkeypatch) -> None:
    def broken_find_all():
        raise StorageError("database is locked")

    monkeypatch.setattr(ctx.repository, "find_all", broken_find_all)

    result = registry.run(ctx, "list", [])
    assert result.ok is False
    assert result.text == "Storage error: database is locked"

# src/todo_manager/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable, Iterable
from typing import cast

from ..core.state import AppState
from ..tasks.task_api import (
    apply_fields,
    build_task,
    format_task,
    format_task_details,
    parse_priority,
    parse_task_fields,
    partition_for_display,
)
from ..tasks.task_models import Task
from .bootstrap import save_task_store

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

ADD_USAGE = "Usage: /add <title> [p:high|medium|low] [c:<category>] [due:YYYY-MM-DD] [-- <description>]"
EDIT_USAGE = "Usage: /edit <n> [<new title>] [p:..] [c:..] [due:YYYY-MM-DD|due:-] [-- <description>]"


class CommandRegistry:
    """Simple slash-command registry used by the console (/add, /list, ...)."""

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

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Save and quit.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _changed(state: AppState, emit: CommandEmitter | None = None) -> None:
    state.dirty = True
    if state.autosave and not save_task_store(state):
        if emit:
            with contextlib.suppress(Exception):
                emit("[SAVE] Auto-save failed, see log for details.")


def _render(state: AppState, tasks: Iterable[Task], header: str) -> str:
    ordered = partition_for_display(tasks)
    state.last_listing = [t.id for t in ordered]
    if not ordered:
        return f"{header}\n  (no tasks)"
    lines = [header]
    for i, task in enumerate(ordered, start=1):
        lines.append(f"  {i}. {format_task(task)}")
    return "\n".join(lines)


def _task_at(state: AppState, raw: str) -> tuple[Task | None, str | None]:
    """Resolve a row number from the last listing. Returns (task, error)."""
    raw = raw.rstrip(".")
    if not raw.isdecimal():
        return None, f"Invalid task number: {raw}"
    n = int(raw)
    if n < 1 or n > len(state.last_listing):
        return None, f"No task #{n} in the last listing. Use /list first."
    task = state.task_store.find_by_id(state.last_listing[n - 1])
    if task is None:
        return None, f"Task #{n} no longer exists."
    return task, None


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list_tasks()
    done = sum(1 for t in tasks if t.completed)
    path = getattr(state.repo, "path", None)
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({len(tasks) - done} open, {done} completed)\n"
        f"  Categories: {len(state.task_store.categories())}\n"
        f"  Autosave: {'ON' if state.autosave else 'OFF'}\n"
        f"  Unsaved changes: {'yes' if state.dirty else 'no'}\n"
        f"  File: {path if path is not None else 'n/a'}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    return _render(state, state.task_store.list_tasks(), "Tasks:")


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return ADD_USAGE
    try:
        task = build_task(parse_task_fields(args))
    except ValueError as e:
        return f"{e}\n{ADD_USAGE}"
    state.task_store.add(task)
    _changed(state, emit)
    logger.debug("Added task id=%s via console", task.id)
    return f"Added: {format_task(task)}"


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) < 2:
        return EDIT_USAGE
    task, err = _task_at(state, args[0])
    if task is None:
        return err or EDIT_USAGE
    try:
        fields = parse_task_fields(args[1:])
        apply_fields(task, fields)
    except ValueError as e:
        return f"{e}\n{EDIT_USAGE}"
    state.task_store.update(task)
    _changed(state, emit)
    return f"Updated: {format_task(task)}"


def cmd_remove(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 1:
        return "Usage: /rm <n>"
    task, err = _task_at(state, args[0])
    if task is None:
        return err or "Usage: /rm <n>"
    state.task_store.remove(task.id)
    state.last_listing = [tid for tid in state.last_listing if tid != task.id]
    _changed(state, emit)
    return f'Removed: "{task.title}"'


def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 1:
        return "Usage: /done <n>"
    task, err = _task_at(state, args[0])
    if task is None:
        return err or "Usage: /done <n>"
    state.task_store.toggle_completed(task.id)
    _changed(state, emit)
    return f"{'Completed' if task.completed else 'Reopened'}: {task.title}"


def cmd_show(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /show <n>"
    task, err = _task_at(state, args[0])
    if task is None:
        return err or "Usage: /show <n>"
    return format_task_details(task)


def cmd_search(state: AppState, args: list[str]) -> str:
    query = " ".join(args)
    return _render(state, state.task_store.search(query), f'Search "{query}":')


def cmd_category(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /cat <name>"
    name = " ".join(args)
    return _render(state, state.task_store.filter_by_category(name), f"Category {name}:")


def cmd_priority(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /prio high|medium|low"
    try:
        priority = parse_priority(args[0])
    except ValueError as e:
        return str(e)
    return _render(state, state.task_store.filter_by_priority(priority), f"Priority {priority}:")


def cmd_categories(state: AppState, args: list[str]) -> str:
    names = [c.name for c in state.task_store.categories()]
    return "Categories: " + ", ".join(names)


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if [a.lower() for a in args] != ["yes"]:
        return f"This deletes all {state.task_store.count_tasks()} tasks. Confirm with: /clear yes"
    state.task_store.clear_all()
    state.last_listing = []
    _changed(state, emit)
    return "All tasks cleared."


def cmd_save(state: AppState, args: list[str]) -> str:
    if save_task_store(state):
        return "Saved!"
    return "Save failed, see log for details."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List all tasks (open first).", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> [p:..] [c:..] [due:..] [-- desc].")
registry.register("edit", cmd_edit, help_text="Edit task #n: /edit <n> [title] [p:..] [c:..] [due:..|due:-].")
registry.register("rm", cmd_remove, help_text="Delete task #n: /rm <n>.", aliases=["del", "delete"])
registry.register("done", cmd_done, help_text="Toggle completed for task #n.", aliases=["toggle"])
registry.register("show", cmd_show, help_text="Show details of task #n.")
registry.register("search", cmd_search, help_text="Search titles/descriptions: /search <text>.")
registry.register("cat", cmd_category, help_text="Tasks in a category: /cat <name>.")
registry.register("prio", cmd_priority, help_text="Tasks with a priority: /prio high|medium|low.")
registry.register("cats", cmd_categories, help_text="List known categories.")
registry.register("clear", cmd_clear, help_text="Delete all tasks: /clear yes.")
registry.register("save", cmd_save, help_text="Save tasks to disk now.")
registry.register("status", cmd_status, help_text="Show task counts and storage info.")

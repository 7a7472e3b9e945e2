# src/todo_manager/tasks/task_api.py

"""
High-level helpers used by the console front end.

The store itself never validates input; this is where titles, priorities and
dates typed by the user are checked before they reach TaskStore.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from .task_models import Category, Priority, Task

PRIORITY_ALIASES = {
    "h": Priority.HIGH,
    "high": Priority.HIGH,
    "m": Priority.MEDIUM,
    "med": Priority.MEDIUM,
    "medium": Priority.MEDIUM,
    "l": Priority.LOW,
    "low": Priority.LOW,
}

CLEAR_DUE = "-"


def validate_title(title: str | None) -> str:
    title = (title or "").strip()
    if not title:
        raise ValueError("Title required.")
    return title


def parse_priority(raw: str) -> Priority:
    try:
        return PRIORITY_ALIASES[raw.strip().lower()]
    except KeyError:
        raise ValueError(f"Invalid priority: {raw!r} (use high/medium/low).") from None


def parse_due_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid due date: {raw!r} (use YYYY-MM-DD).") from None


@dataclass(slots=True)
class TaskFields:
    """
    Fields parsed from a command line like:

        Buy milk p:high c:Home due:2024-01-10 -- two litres

    Anything left unset stays None. `clear_due` is set by `due:-`.
    """

    title: str | None = None
    description: str | None = None
    category: str | None = None
    priority: Priority | None = None
    due_date: date | None = None
    clear_due: bool = False


def parse_task_fields(args: list[str]) -> TaskFields:
    fields = TaskFields()

    if "--" in args:
        cut = args.index("--")
        desc = " ".join(args[cut + 1 :]).strip()
        fields.description = desc
        args = args[:cut]

    words: list[str] = []
    for token in args:
        key, sep, value = token.partition(":")
        key = key.lower()
        if sep and key in ("p", "prio", "priority"):
            fields.priority = parse_priority(value)
        elif sep and key in ("c", "cat", "category"):
            if not value.strip():
                raise ValueError("Category name required after c:")
            fields.category = value.strip()
        elif sep and key == "due":
            if value.strip() == CLEAR_DUE:
                fields.clear_due = True
            else:
                fields.due_date = parse_due_date(value)
        else:
            words.append(token)

    if words:
        fields.title = " ".join(words)
    return fields


def build_task(fields: TaskFields) -> Task:
    return Task(
        title=validate_title(fields.title),
        description=fields.description or None,
        category=Category(fields.category) if fields.category else Category(),
        priority=fields.priority,
        due_date=fields.due_date,
    )


def apply_fields(task: Task, fields: TaskFields) -> None:
    """Edit a task in place; only fields present in `fields` change."""
    if fields.title is not None:
        task.title = validate_title(fields.title)
    if fields.description is not None:
        task.description = fields.description or None
    if fields.category is not None:
        task.category = Category(fields.category)
    if fields.priority is not None:
        task.priority = fields.priority
    if fields.clear_due:
        task.due_date = None
    elif fields.due_date is not None:
        task.due_date = fields.due_date


def partition_for_display(tasks: Iterable[Task]) -> list[Task]:
    """Open tasks first, completed last; order inside each group is kept."""
    tasks = list(tasks)
    return [t for t in tasks if not t.completed] + [t for t in tasks if t.completed]


def format_task(task: Task) -> str:
    done = "[x]" if task.completed else "[ ]"
    cat = f" ({task.category.name})" if task.category is not None else ""
    due = f" - due {task.due_date.isoformat()}" if task.due_date else ""
    return f"{done} {task.title}{cat}{due} - {task.priority.value}"


def format_task_details(task: Task) -> str:
    category = task.category.name if task.category is not None else "General"
    due = task.due_date.isoformat() if task.due_date else "n/a"
    return (
        f"Title: {task.title}\n"
        f"Description: {task.description or ''}\n"
        f"Category: {category}\n"
        f"Priority: {task.priority}\n"
        f"Due: {due}\n"
        f"Created: {task.created_at.strftime('%Y-%m-%d %H:%M')}\n"
        f"Completed: {'yes' if task.completed else 'no'}\n"
        f"Id: {task.id}"
    )

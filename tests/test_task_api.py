# tests/test_task_api.py

from __future__ import annotations

from datetime import date, datetime

import pytest

from todo_manager.tasks.task_api import (
    apply_fields,
    build_task,
    format_task,
    parse_task_fields,
    partition_for_display,
    validate_title,
)
from todo_manager.tasks.task_models import Category, Priority, Task


def test_parse_task_fields_full_line() -> None:
    fields = parse_task_fields(
        "Buy milk p:high c:Home due:2024-01-10 -- two litres".split()
    )
    assert fields.title == "Buy milk"
    assert fields.priority is Priority.HIGH
    assert fields.category == "Home"
    assert fields.due_date == date(2024, 1, 10)
    assert fields.description == "two litres"
    assert fields.clear_due is False


def test_parse_task_fields_rejects_bad_values() -> None:
    with pytest.raises(ValueError):
        parse_task_fields(["x", "p:urgent"])
    with pytest.raises(ValueError):
        parse_task_fields(["x", "due:10/01/2024"])
    with pytest.raises(ValueError):
        parse_task_fields(["x", "c:"])


def test_build_task_requires_title() -> None:
    with pytest.raises(ValueError):
        build_task(parse_task_fields(["p:low"]))
    with pytest.raises(ValueError):
        validate_title("   ")

    task = build_task(parse_task_fields(["Walk", "dog"]))
    assert task.title == "Walk dog"
    assert task.priority is Priority.MEDIUM
    assert task.category == Category("General")


def test_apply_fields_only_touches_given_fields() -> None:
    task = Task(title="Old", description="keep", priority=Priority.LOW, due_date=date(2024, 1, 1))
    apply_fields(task, parse_task_fields(["p:h"]))
    assert task.title == "Old"
    assert task.description == "keep"
    assert task.priority is Priority.HIGH
    assert task.due_date == date(2024, 1, 1)

    apply_fields(task, parse_task_fields(["New", "title", "due:-", "c:Work"]))
    assert task.title == "New title"
    assert task.due_date is None
    assert task.category == Category("work")


def test_partition_for_display_keeps_order_within_groups() -> None:
    a = Task(title="a", created_at=datetime(2024, 1, 1))
    b = Task(title="b", created_at=datetime(2024, 1, 2))
    c = Task(title="c", created_at=datetime(2024, 1, 3))
    b.toggle_completed()
    assert partition_for_display([a, b, c]) == [a, c, b]


def test_format_task() -> None:
    task = Task(title="Buy Milk", category=Category("Home"), priority=Priority.HIGH,
                due_date=date(2024, 1, 10))
    assert format_task(task) == "[ ] Buy Milk (Home) - due 2024-01-10 - HIGH"
    task.toggle_completed()
    assert format_task(task).startswith("[x] ")

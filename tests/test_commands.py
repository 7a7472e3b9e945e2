# tests/test_commands.py

from __future__ import annotations

import json

from todo_manager.cli.commands import CommandRegistry, registry
from todo_manager.tasks.task_models import Priority


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_add_list_and_autosave(state) -> None:
    reply = registry.handle(state, "/add Buy Milk p:high c:Home due:2024-01-10")
    assert reply is not None and reply.startswith("Added:")
    registry.handle(state, "/add Walk dog")

    listing = registry.handle(state, "/list") or ""
    lines = listing.splitlines()
    assert "1. [ ] Buy Milk (Home) - due 2024-01-10 - HIGH" in lines[1]
    assert "Walk dog" in lines[2]

    data = json.loads(state.settings.tasks_path.read_text("utf-8"))
    assert {t["title"] for t in data["tasks"]} == {"Buy Milk", "Walk dog"}
    assert state.dirty is False


def test_add_rejects_invalid_input(state) -> None:
    assert "Title required" in (registry.handle(state, "/add p:high") or "")
    assert "Invalid due date" in (registry.handle(state, "/add x due:tomorrow") or "")
    assert state.task_store.count_tasks() == 0


def test_row_number_must_be_decimal_digits(state) -> None:
    registry.handle(state, "/add keep me")
    registry.handle(state, "/list")

    assert "Invalid task number" in (registry.handle(state, "/rm ²") or "")
    assert "Invalid task number" in (registry.handle(state, "/done x1") or "")
    assert state.task_store.count_tasks() == 1


def test_done_moves_task_to_bottom(state) -> None:
    registry.handle(state, "/add First p:high")
    registry.handle(state, "/add Second")
    registry.handle(state, "/list")

    assert (registry.handle(state, "/done 1") or "").startswith("Completed")
    lines = (registry.handle(state, "/list") or "").splitlines()
    assert "Second" in lines[1]
    assert "[x] First" in lines[2]


def test_edit_show_and_remove(state) -> None:
    registry.handle(state, "/add Draft")
    registry.handle(state, "/list")

    reply = registry.handle(state, "/edit 1 Final p:low c:Work -- polish wording") or ""
    assert reply.startswith("Updated:")
    task = state.task_store.list_tasks()[0]
    assert task.title == "Final"
    assert task.priority is Priority.LOW
    assert task.description == "polish wording"
    assert "Work" in (registry.handle(state, "/cats") or "")

    details = registry.handle(state, "/show 1") or ""
    assert "Description: polish wording" in details

    assert "Removed" in (registry.handle(state, "/rm 1") or "")
    assert state.task_store.count_tasks() == 0
    assert "No task #1" in (registry.handle(state, "/rm 1") or "")


def test_search_category_and_priority_filters(state) -> None:
    registry.handle(state, "/add Buy Milk c:Work")
    registry.handle(state, "/add Read book p:low")

    assert "Buy Milk" in (registry.handle(state, "/search milk") or "")
    assert "Read book" not in (registry.handle(state, "/search milk") or "")
    assert "Buy Milk" in (registry.handle(state, "/cat work") or "")
    assert "(no tasks)" in (registry.handle(state, "/prio high") or "")
    assert "Read book" in (registry.handle(state, "/prio l") or "")


def test_clear_requires_confirmation(state) -> None:
    registry.handle(state, "/add a")
    assert "Confirm" in (registry.handle(state, "/clear") or "")
    assert state.task_store.count_tasks() == 1
    assert registry.handle(state, "/clear yes") == "All tasks cleared."
    assert state.task_store.count_tasks() == 0

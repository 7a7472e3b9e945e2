# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_manager.core.state import AppState
from todo_manager.tasks.task_file import TaskFileRepository
from todo_manager.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "data" / "tasks.json",
        autosave=True,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState with an empty store and a real task file under tmp_path."""
    return AppState(
        settings=settings,
        task_store=TaskStore(),
        repo=TaskFileRepository(settings.tasks_path),
        autosave=settings.autosave,
    )

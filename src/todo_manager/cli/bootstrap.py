# src/todo_manager/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- loads the task file into a TaskStore and wires it into AppState,
- saves the store back on request / at shutdown.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskRepo
from ..core.state import AppState
from ..tasks.task_file import PersistenceError, TaskFileRepository
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def load_task_store(repo: TaskRepo) -> TaskStore:
    """Load the saved store; any failure falls back to an empty one."""
    try:
        return repo.load()
    except PersistenceError as e:
        logger.warning("Load failed, starting with an empty task list: %s", e)
        return TaskStore()


def create_initial_state(*, settings=None, repo: TaskRepo | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and repo injectable makes the app easier to test and avoids hidden
    global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if repo is None:
        repo = TaskFileRepository(settings.tasks_path)

    return AppState(
        settings=settings,
        task_store=load_task_store(repo),
        repo=repo,
        autosave=bool(getattr(settings, "autosave", True)),
    )


def save_task_store(state: AppState) -> bool:
    try:
        state.repo.save(state.task_store)
    except PersistenceError:
        logger.exception("Auto-save failed.")
        return False
    state.dirty = False
    return True

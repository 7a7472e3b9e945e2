# src/todo_manager/core/state.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_store import TaskStore
from .ports import TaskRepo


@dataclass
class AppState:
    """
    Everything a running session needs, built once in cli.bootstrap and passed down.

    `last_listing` holds the task ids of the most recent listing shown to the user,
    so commands can refer to tasks by their row number.
    """

    settings: Any
    task_store: TaskStore
    repo: TaskRepo
    autosave: bool = True

    last_listing: list[uuid.UUID] = field(default_factory=list)
    dirty: bool = False

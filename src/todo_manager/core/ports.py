# src/todo_manager/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The console and bootstrap depend on Protocols instead of concrete implementations.
This keeps the storage backend swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_store import TaskStore


class TaskRepo(Protocol):
    """
    Persistence adapter: writes/reads the whole TaskStore at once.

    Both methods raise task_file.PersistenceError on failure.
    A repository with nothing saved yet loads as an empty store.
    """

    def save(self, store: TaskStore) -> None: ...

    def load(self) -> TaskStore: ...

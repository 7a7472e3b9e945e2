# src/todo_manager/tasks/task_file.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import uuid
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .task_models import Category, Priority, Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class PersistenceError(RuntimeError):
    """Saving or loading the task file failed."""


def _parse_datetime(raw: str) -> datetime:
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is not None:
        # Keep everything naive local time so created_at values stay comparable.
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


class TaskFileRepository:
    """
    JSON task file.

    The document carries a "version" tag so the on-disk layout can evolve
    independently of the in-memory classes:

        {"version": 1, "saved_at": ..., "categories": [...], "tasks": [...]}

    Writes go to a sibling .tmp file first and are moved into place with os.replace,
    so a failed save leaves the previous file untouched.
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- encoding ----

    @staticmethod
    def _task_to_dict(task: Task) -> dict[str, Any]:
        if not task.title or not task.title.strip():
            raise PersistenceError(f"Task {task.id} has an empty title")
        return {
            "id": str(task.id),
            "title": task.title,
            "description": task.description,
            "category": task.category.name if task.category is not None else None,
            "priority": task.priority.value,
            "due_date": task.due_date.isoformat() if task.due_date else None,
            "created_at": task.created_at.isoformat(),
            "completed": bool(task.completed),
        }

    def _dict_to_task(self, raw: Any) -> Task | None:
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object task record in %s", self._path)
            return None

        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            logger.warning("Skipping task without title id=%s", raw.get("id"))
            return None

        try:
            task_id = uuid.UUID(str(raw["id"]))
            created_at = _parse_datetime(str(raw["created_at"]))
        except (KeyError, ValueError):
            logger.warning("Skipping task with bad id/created_at: %r", raw.get("id"))
            return None

        due_date: date | None = None
        raw_due = raw.get("due_date")
        if raw_due:
            try:
                due_date = date.fromisoformat(str(raw_due))
            except ValueError:
                logger.warning("Dropping unparseable due_date=%r for task %s", raw_due, task_id)

        raw_category = raw.get("category", "General")
        description = raw.get("description")

        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            logger.warning("Treating non-boolean completed=%r as open for task %s", completed, task_id)
            completed = False

        raw_priority = raw.get("priority")
        if raw_priority is not None and not isinstance(raw_priority, str):
            logger.warning("Unknown priority=%r for task %s, using MEDIUM", raw_priority, task_id)

        return Task(
            id=task_id,
            created_at=created_at,
            title=title,
            description=str(description) if description is not None else None,
            category=Category(str(raw_category)) if raw_category is not None else None,
            priority=Priority.from_str(raw_priority),
            due_date=due_date,
            completed=completed,
        )

    def dump(self, store: TaskStore) -> dict[str, Any]:
        return {
            "version": FORMAT_VERSION,
            "saved_at": datetime.now().isoformat(),
            "categories": [c.name for c in store.categories()],
            "tasks": [self._task_to_dict(t) for t in store.list_tasks()],
        }

    def restore(self, data: Any) -> TaskStore:
        if not isinstance(data, dict):
            raise PersistenceError(f"{self._path}: expected a JSON object at top level")

        version = data.get("version")
        if version != FORMAT_VERSION:
            raise PersistenceError(f"{self._path}: unsupported format version {version!r}")

        raw_categories = data.get("categories") or []
        if not isinstance(raw_categories, list):
            raise PersistenceError(f"{self._path}: 'categories' must be a list")

        store = TaskStore()
        for name in raw_categories:
            if isinstance(name, str) and name.strip():
                store.add_category(Category(name))

        raw_tasks = data.get("tasks") or []
        if not isinstance(raw_tasks, list):
            raise PersistenceError(f"{self._path}: 'tasks' must be a list")

        for raw in raw_tasks:
            task = self._dict_to_task(raw)
            if task is not None:
                store.add(task)
        return store

    # ---- public API ----

    def save(self, store: TaskStore) -> None:
        payload = json.dumps(self.dump(store), ensure_ascii=False, indent=2)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise PersistenceError(f"Failed to write {self._path}: {e}") from e

        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)
        logger.info("Saved %d tasks to %s", store.count_tasks(), self._path)

    def load(self) -> TaskStore:
        if not self._path.exists():
            logger.info("No task file at %s, starting empty", self._path)
            return TaskStore()

        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Failed to read {self._path}: {e}") from e

        store = self.restore(data)
        logger.info("Loaded %d tasks from %s", store.count_tasks(), self._path)
        return store

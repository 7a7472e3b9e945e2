# src/todo_manager/tasks/task_store.py

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable

from .task_models import DEFAULT_CATEGORY_NAME, Category, Priority, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task store.

    Tasks are kept in insertion order, but every listing is returned sorted by the
    task ordering rule (priority, then due date, then creation time) as a fresh list.

    The store does no I/O; persistence lives in task_file.TaskFileRepository.
    Lookups that miss return None instead of raising.
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = []
        self._categories: dict[str, Category] = {}
        self.add_category(Category(DEFAULT_CATEGORY_NAME))
        for task in tasks or ():
            self.add(task)

    # ---- low-level helpers ----

    def add_category(self, category: Category | None) -> None:
        if category is None:
            return
        # First spelling wins; later case variants map onto it.
        self._categories.setdefault(category.key, category)

    def _select(self, predicate: Callable[[Task], bool]) -> list[Task]:
        return sorted(t for t in self._tasks if predicate(t))

    @staticmethod
    def _same_id(task: Task, task_id: uuid.UUID | str) -> bool:
        return str(task.id) == str(task_id)

    # ---- mutation ----

    def add(self, task: Task) -> None:
        self._tasks.append(task)
        self.add_category(task.category)
        logger.debug("Task added id=%s priority=%s", task.id, task.priority)

    def update(self, task: Task) -> None:
        """Tasks are edited in place by the caller; only the category set needs refreshing."""
        self.add_category(task.category)

    def remove(self, task_id: uuid.UUID | str) -> None:
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if not self._same_id(t, task_id)]
        if len(self._tasks) != before:
            logger.debug("Task removed id=%s", task_id)

    def toggle_completed(self, task_id: uuid.UUID | str) -> Task | None:
        task = self.find_by_id(task_id)
        if task is None:
            return None
        task.toggle_completed()
        logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)
        return task

    def clear_all(self) -> None:
        n = len(self._tasks)
        self._tasks.clear()
        logger.info("Cleared %d tasks", n)

    # ---- queries ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def find_by_id(self, task_id: uuid.UUID | str) -> Task | None:
        for task in self._tasks:
            if self._same_id(task, task_id):
                return task
        return None

    def list_tasks(self) -> list[Task]:
        return sorted(self._tasks)

    def filter_by_category(self, name: str | None) -> list[Task]:
        return self._select(lambda t: t.category is not None and t.category.matches(name))

    def filter_by_priority(self, priority: Priority) -> list[Task]:
        return self._select(lambda t: t.priority == priority)

    def search(self, query: str | None) -> list[Task]:
        """
        Case-insensitive substring search over title and description.

        An empty or None query matches every task.
        """
        needle = (query or "").casefold()

        def hit(task: Task) -> bool:
            if needle in task.title.casefold():
                return True
            return task.description is not None and needle in task.description.casefold()

        return self._select(hit)

    def categories(self) -> list[Category]:
        return sorted(self._categories.values(), key=lambda c: c.key)

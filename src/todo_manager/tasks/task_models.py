# src/todo_manager/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

DEFAULT_CATEGORY_NAME = "General"


class Priority(StrEnum):
    """
    Task urgency.

    Sort position is given by `rank`: HIGH sorts first, LOW last.
    """

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def from_str(cls, raw: object) -> Priority:
        if not isinstance(raw, str) or not raw:
            return cls.MEDIUM
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return cls.MEDIUM


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


@dataclass(frozen=True, slots=True, eq=False)
class Category:
    """Named grouping tag. Names compare case-insensitively."""

    name: str = DEFAULT_CATEGORY_NAME

    def __post_init__(self) -> None:
        if self.name is None:
            object.__setattr__(self, "name", DEFAULT_CATEGORY_NAME)

    @property
    def key(self) -> str:
        return self.name.casefold()

    def matches(self, name: str | None) -> bool:
        return name is not None and self.key == name.casefold()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.name


_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


@dataclass(slots=True, eq=False)
class Task:
    """
    A single to-do item.

    `id` and `created_at` are assigned once (at creation or when loaded from disk)
    and cannot be reassigned afterwards. Everything else is edited in place;
    setting `priority` to None stores MEDIUM.
    """

    title: str
    description: str | None = None
    category: Category | None = field(default_factory=Category)
    priority: Priority = Priority.MEDIUM
    due_date: date | None = None
    completed: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=datetime.now)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IMMUTABLE_FIELDS:
            try:
                object.__getattribute__(self, name)
            except AttributeError:
                pass
            else:
                raise AttributeError(f"Task.{name} cannot be changed")
        elif name == "priority" and value is None:
            value = Priority.MEDIUM
        object.__setattr__(self, name, value)

    def toggle_completed(self) -> None:
        self.completed = not self.completed

    def sort_key(self) -> tuple[Any, ...]:
        return (
            self.priority.rank,
            self.due_date is None,
            self.due_date or date.min,
            self.created_at,
            str(self.id),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.sort_key() < other.sort_key()

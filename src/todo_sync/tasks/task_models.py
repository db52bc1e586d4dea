# src/todo_sync/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.errors import ServerError

TaskId = int | str


class TaskFilter(StrEnum):
    """View-only predicate over the task list."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        if not raw:
            return cls.ALL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.ALL

    def matches(self, task: Task) -> bool:
        if self is TaskFilter.COMPLETED:
            return task.completed
        if self is TaskFilter.PENDING:
            return not task.completed
        return True


@dataclass(frozen=True, slots=True)
class Task:
    id: TaskId
    title: str
    completed: bool = False

    @classmethod
    def from_json(cls, obj: Any) -> Task:
        """
        Parse one item as returned by the server.

        The server owns ids, so a missing id is a broken payload, not something
        to paper over locally.
        """
        if not isinstance(obj, dict):
            raise ServerError(f"Malformed task payload: expected object, got {type(obj).__name__}")

        task_id = obj.get("id")
        # bool is an int subclass; reject it explicitly.
        if isinstance(task_id, bool) or not isinstance(task_id, (int, str)) or task_id == "":
            raise ServerError(f"Malformed task payload: bad id {task_id!r}")

        title = obj.get("title")
        if not isinstance(title, str):
            raise ServerError(f"Malformed task payload: bad title for id={task_id}")

        completed = obj.get("completed")
        if completed is None:
            completed = False
        elif not isinstance(completed, bool):
            raise ServerError(f"Malformed task payload: bad completed flag for id={task_id}")

        return cls(id=task_id, title=title, completed=completed)

    def to_payload(self) -> dict[str, Any]:
        return {"title": self.title, "completed": self.completed}

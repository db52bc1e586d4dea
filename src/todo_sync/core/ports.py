# src/todo_sync/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The sync client depends on Protocols instead of concrete implementations.
This keeps the HTTP store swappable and lets tests run against in-memory fakes.
"""

from typing import Protocol

from ..tasks.task_models import Task, TaskId


class TaskRepo(Protocol):
    """Remote CRUD store holding the authoritative task list."""

    async def list_tasks(self) -> list[Task]: ...

    async def create_task(self, title: str) -> Task: ...

    async def update_task(self, task_id: TaskId, *, title: str, completed: bool) -> Task: ...

    async def delete_task(self, task_id: TaskId) -> None: ...


class Notifier(Protocol):
    """
    Presentation-side port: how the sync client surfaces failures.

    Implementations must not block (print a line, push a toast, etc).
    """

    def notify(self, text: str) -> None: ...

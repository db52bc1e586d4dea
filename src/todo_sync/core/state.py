# src/todo_sync/core/state.py

"""
Application state.

AppState is immutable: every transition returns a new instance via
dataclasses.replace. The sync client and the console layer pass it around
explicitly, so the whole client can run headless in tests.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from ..tasks.task_models import Task, TaskFilter


@dataclass(frozen=True, slots=True)
class EditSession:
    """Snapshot of the task being edited (update mode)."""

    task: Task


@dataclass(frozen=True, slots=True)
class AppState:
    tasks: tuple[Task, ...] = ()
    title_input: str = ""
    # None => create mode.
    edit_session: EditSession | None = None
    filter: TaskFilter = TaskFilter.ALL
    dark_mode: bool = False

    # Populated from settings in bootstrap; kept off equality so tests can compare states.
    settings: object | None = field(default=None, compare=False, repr=False)

    @property
    def editing(self) -> bool:
        return self.edit_session is not None


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter) -> list[Task]:
    return [t for t in tasks if task_filter.matches(t)]


def visible_tasks(state: AppState) -> list[Task]:
    return filter_tasks(state.tasks, state.filter)


def set_title_input(state: AppState, text: str) -> AppState:
    return replace(state, title_input=text)


def begin_edit(state: AppState, task: Task) -> AppState:
    """Enter update mode: copy the title into the input and remember the task."""
    return replace(state, title_input=task.title, edit_session=EditSession(task=task))


def cancel_edit(state: AppState) -> AppState:
    """Leave update mode without sending anything."""
    return replace(state, title_input="", edit_session=None)


def set_filter(state: AppState, task_filter: TaskFilter) -> AppState:
    return replace(state, filter=task_filter)


def toggle_dark_mode(state: AppState) -> AppState:
    return replace(state, dark_mode=not state.dark_mode)

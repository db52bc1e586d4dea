# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_sync.core.state import AppState
from todo_sync.tasks.task_models import Task
from todo_sync.tasks.task_sync import TaskSyncClient

from .fakes import FakeNotifier, FakeTaskRepo


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="todo-sync-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        api_base_url="http://todo.test",
        connect_timeout_seconds=1.0,
        read_timeout_seconds=1.0,
        max_retries=0,
        retry_backoff_seconds=0.0,
        consistency="refetch",
        dark_mode=False,
        default_filter="all",
    )


@pytest.fixture()
def repo() -> FakeTaskRepo:
    return FakeTaskRepo(
        [
            Task(id=1, title="Buy milk", completed=False),
            Task(id=2, title="Walk dog", completed=False),
            Task(id=3, title="Pay rent", completed=True),
        ]
    )


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def client(repo: FakeTaskRepo, notifier: FakeNotifier) -> TaskSyncClient:
    return TaskSyncClient(repo, notifier=notifier)


@pytest.fixture()
def state(repo: FakeTaskRepo, settings: SimpleNamespace) -> AppState:
    """AppState as it looks right after the first successful fetch."""
    return AppState(tasks=tuple(repo.tasks), settings=settings)

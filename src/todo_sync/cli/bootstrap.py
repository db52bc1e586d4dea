# src/todo_sync/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP store, consistency policy and notifier into a TaskSyncClient,
- builds the initial AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Notifier
from ..core.state import AppState
from ..tasks.task_models import TaskFilter
from ..tasks.task_store import RemoteTaskStore
from ..tasks.task_sync import TaskSyncClient, policy_from_name

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create an empty AppState from the provided settings.

    The task list starts empty; the first refresh fills it.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    return AppState(
        filter=TaskFilter.parse(getattr(settings, "default_filter", "all")),
        dark_mode=bool(getattr(settings, "dark_mode", False)),
        settings=settings,
    )


def create_sync_client(*, settings=None, notifier: Notifier | None = None) -> TaskSyncClient:
    """
    Build the HTTP-backed sync client.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = RemoteTaskStore(
        settings.api_base_url,
        connect_timeout=settings.connect_timeout_seconds,
        read_timeout=settings.read_timeout_seconds,
        max_retries=settings.max_retries,
        retry_backoff_seconds=settings.retry_backoff_seconds,
    )
    policy = policy_from_name(settings.consistency)
    logger.info("Sync client ready (policy=%s)", policy.__class__.__name__)

    return TaskSyncClient(store, policy=policy, notifier=notifier)

# src/todo_sync/core/errors.py

"""
Failure taxonomy for talking to the remote task store.

The store raises these; the sync client catches them at its boundary and
hands them back to the caller inside a SyncResult.
"""

from __future__ import annotations


class TaskSyncError(Exception):
    """Base class. str(err) is short enough to show to a user."""


class TransportError(TaskSyncError):
    """Network unreachable, connection refused, timeout."""


class ServerError(TaskSyncError):
    """Non-2xx response or a payload we cannot make sense of."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        # Server-provided reason, e.g. FastAPI's {"detail": "Todo not found"}.
        self.detail = detail

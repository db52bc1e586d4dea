# src/todo_sync/tasks/task_sync.py

from __future__ import annotations

"""
Task sync client.

Mediates every read and write between the presentation layer and the remote
task store and keeps one authoritative local copy of the task list:
- every operation takes an AppState and returns a SyncResult with the new state,
- failures never escape: they come back as SyncResult.error (and go to the notifier),
- after each successful mutation a consistency policy brings the local list in
  line with the server (default: refetch the whole list).

Operations on one client are serialized with an asyncio.Lock, so a delete and
a refresh issued back to back cannot interleave.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol

from ..core.errors import TaskSyncError
from ..core.ports import Notifier, TaskRepo
from ..core.state import AppState, begin_edit, cancel_edit
from .task_models import Task, TaskId

logger = logging.getLogger(__name__)


class MutationKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(slots=True, frozen=True)
class Mutation:
    """
    A mutation the server has confirmed.

    task is the server's response for create/update; None for delete.
    """

    kind: MutationKind
    task_id: TaskId
    task: Task | None = None


@dataclass(slots=True, frozen=True)
class SyncResult:
    state: AppState
    error: TaskSyncError | None = None
    # True when submit() was a no-op because the title was blank.
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class ConsistencyPolicy(Protocol):
    async def apply(self, repo: TaskRepo, state: AppState, mutation: Mutation) -> AppState: ...


class RefetchPolicy:
    """Replace the local list with a full GET after every mutation."""

    async def apply(self, repo: TaskRepo, state: AppState, mutation: Mutation) -> AppState:
        tasks = await repo.list_tasks()
        return replace(state, tasks=tuple(tasks))


class PatchPolicy:
    """
    Apply the server's own response to the local list, no extra round trip.

    Only confirmed responses are applied, so the list never holds a guess.
    Order of existing items is kept; created tasks are appended.
    """

    async def apply(self, repo: TaskRepo, state: AppState, mutation: Mutation) -> AppState:
        tasks = list(state.tasks)

        if mutation.kind is MutationKind.DELETE:
            tasks = [t for t in tasks if t.id != mutation.task_id]
        elif mutation.kind is MutationKind.CREATE and mutation.task is not None:
            tasks.append(mutation.task)
        elif mutation.kind is MutationKind.UPDATE and mutation.task is not None:
            tasks = [mutation.task if t.id == mutation.task_id else t for t in tasks]

        return replace(state, tasks=tuple(tasks))


def policy_from_name(name: str | None) -> ConsistencyPolicy:
    if (name or "").strip().lower() == "patch":
        return PatchPolicy()
    return RefetchPolicy()


class TaskSyncClient:
    def __init__(
        self,
        repo: TaskRepo,
        *,
        policy: ConsistencyPolicy | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.repo = repo
        self.policy: ConsistencyPolicy = policy or RefetchPolicy()
        self.notifier = notifier
        self._lock = asyncio.Lock()

    # ---- helpers ----

    def _report(self, what: str, err: TaskSyncError) -> None:
        logger.warning("%s failed: %s", what, err)
        if self.notifier is None:
            return
        try:
            self.notifier.notify(f"{what} failed: {err}")
        except Exception:
            logger.exception("Notifier crashed while reporting %r", what)

    async def _after_mutation(self, state: AppState, mutation: Mutation) -> SyncResult:
        """Run the consistency policy; the mutation itself already succeeded."""
        try:
            synced = await self.policy.apply(self.repo, state, mutation)
        except TaskSyncError as e:
            self._report("Refreshing tasks", e)
            return SyncResult(state, e)
        return SyncResult(synced)

    # ---- operations ----

    async def refresh(self, state: AppState) -> SyncResult:
        """Fetch the full list and replace local tasks wholesale."""
        async with self._lock:
            try:
                tasks = await self.repo.list_tasks()
            except TaskSyncError as e:
                self._report("Fetching tasks", e)
                return SyncResult(state, e)
            return SyncResult(replace(state, tasks=tuple(tasks)))

    async def submit(self, state: AppState, title: str | None = None) -> SyncResult:
        """
        Create or update depending on the edit session.

        title, when given, replaces the pending input first (as if typed).
        A blank title is a no-op: nothing is sent and the state is returned as-is.
        On failure the input and the edit session are kept so the user can retry.
        """
        if title is not None:
            state = replace(state, title_input=title)

        title = state.title_input
        if not title.strip():
            return SyncResult(state, skipped=True)

        session = state.edit_session

        async with self._lock:
            try:
                if session is None:
                    created = await self.repo.create_task(title)
                    mutation = Mutation(MutationKind.CREATE, created.id, created)
                else:
                    # Completion is only changed by toggle_completed, never by a title edit.
                    updated = await self.repo.update_task(
                        session.task.id, title=title, completed=session.task.completed
                    )
                    mutation = Mutation(MutationKind.UPDATE, session.task.id, updated)
            except TaskSyncError as e:
                self._report("Saving task", e)
                return SyncResult(state, e)

            return await self._after_mutation(cancel_edit(state), mutation)

    async def remove(self, state: AppState, task_id: TaskId) -> SyncResult:
        async with self._lock:
            try:
                await self.repo.delete_task(task_id)
            except TaskSyncError as e:
                self._report("Deleting task", e)
                return SyncResult(state, e)

            return await self._after_mutation(state, Mutation(MutationKind.DELETE, task_id))

    async def toggle_completed(self, state: AppState, task: Task) -> SyncResult:
        async with self._lock:
            try:
                updated = await self.repo.update_task(
                    task.id, title=task.title, completed=not task.completed
                )
            except TaskSyncError as e:
                self._report("Updating task", e)
                return SyncResult(state, e)

            return await self._after_mutation(state, Mutation(MutationKind.UPDATE, task.id, updated))

    # ---- local-only ----

    def begin_edit(self, state: AppState, task: Task) -> AppState:
        return begin_edit(state, task)

    def cancel_edit(self, state: AppState) -> AppState:
        return cancel_edit(state)

    async def aclose(self) -> None:
        """Best-effort close of the underlying store (no exceptions should escape)."""
        close = getattr(self.repo, "aclose", None)
        if close is None:
            return
        try:
            await close()
        except Exception:
            logger.debug("Task store close failed.", exc_info=True)

# src/todo_sync/tasks/task_store.py

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from ..core.errors import ServerError, TransportError
from .task_models import Task, TaskId

logger = logging.getLogger(__name__)

# POST is not idempotent: retrying it after a lost response could create duplicates.
_RETRYABLE_METHODS = frozenset({"GET", "PUT", "DELETE"})


class RemoteTaskStore:
    """
    HTTP client for the remote /todos CRUD API.

    Error mapping:
    - httpx.TransportError (connect/read timeouts, refused connections) -> TransportError
    - non-2xx responses and undecodable/malformed bodies -> ServerError

    Idempotent requests are retried on TransportError up to max_retries times
    with exponential backoff. Server errors are never retried.
    """

    def __init__(
        self,
        base_url: str,
        *,
        connect_timeout: float = 5.0,
        read_timeout: float = 10.0,
        max_retries: int = 0,
        retry_backoff_seconds: float = 0.5,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._max_retries = max(0, int(max_retries))
        self._retry_backoff = max(0.0, float(retry_backoff_seconds))

        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(
                    connect=connect_timeout,
                    read=read_timeout,
                    write=10.0,
                    pool=connect_timeout,
                ),
            )
        self._client = client
        logger.info("RemoteTaskStore ready base_url=%s retries=%s", self._base_url, self._max_retries)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> RemoteTaskStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ---- low-level helpers ----

    async def _request(self, method: str, path: str, *, json: Any = None) -> httpx.Response:
        retries = self._max_retries if method in _RETRYABLE_METHODS else 0
        attempt = 0

        while True:
            try:
                resp = await self._client.request(method, path, json=json)
            except httpx.TransportError as e:
                if attempt >= retries:
                    raise TransportError(f"Cannot reach task server: {e.__class__.__name__}") from e
                delay = self._retry_backoff * (2**attempt)
                attempt += 1
                logger.warning(
                    "%s %s failed (%s), retry %d/%d in %.2fs",
                    method, path, e.__class__.__name__, attempt, retries, delay,
                )
                await asyncio.sleep(delay)
                continue

            if not resp.is_success:
                detail = self._error_detail(resp)
                message = f"Task server returned HTTP {resp.status_code} for {method} {path}"
                if detail:
                    message = f"{message}: {detail}"
                raise ServerError(message, status_code=resp.status_code, detail=detail)
            return resp

    @staticmethod
    def _error_detail(resp: httpx.Response) -> str | None:
        """FastAPI-style {"detail": ...} from an error body, if there is one."""
        try:
            body = resp.json()
        except ValueError:
            return None
        if not isinstance(body, dict) or body.get("detail") in (None, ""):
            return None
        return str(body["detail"])

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise ServerError("Task server returned invalid JSON", status_code=resp.status_code) from e

    @staticmethod
    def _path(task_id: TaskId) -> str:
        return f"/todos/{task_id}"

    # ---- CRUD ----

    async def list_tasks(self) -> list[Task]:
        resp = await self._request("GET", "/todos")
        data = self._json(resp)
        if not isinstance(data, list):
            raise ServerError("Task server returned a non-list for GET /todos", status_code=resp.status_code)
        tasks = [Task.from_json(item) for item in data]
        logger.debug("Fetched %d tasks", len(tasks))
        return tasks

    async def create_task(self, title: str) -> Task:
        resp = await self._request("POST", "/todos", json={"title": title})
        task = Task.from_json(self._json(resp))
        logger.info("Created task id=%s", task.id)
        return task

    async def update_task(self, task_id: TaskId, *, title: str, completed: bool) -> Task:
        wanted = Task(id=task_id, title=title, completed=completed)
        resp = await self._request("PUT", self._path(task_id), json=wanted.to_payload())
        logger.info("Updated task id=%s completed=%s", task_id, completed)
        # Some backends answer PUT with 204; the request body is then the best description.
        if not resp.content:
            return wanted
        return Task.from_json(self._json(resp))

    async def delete_task(self, task_id: TaskId) -> None:
        await self._request("DELETE", self._path(task_id))
        logger.info("Deleted task id=%s", task_id)

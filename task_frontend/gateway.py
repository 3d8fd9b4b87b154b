"""
TaskGateway: the only code that talks to the remote task API.

Every call comes back as one of three results so route handlers never see
httpx exceptions or raw status codes:

- ``Ok(value)``   - 2xx, with the decoded JSON body (or ``None`` when empty)
- ``NotFound()``  - 404
- ``Failure(reason)`` - anything else; ``reason`` is for logs only
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, TypeVar, Union

import httpx

from .config import Settings
from .models import StatusUpdate, TaskWrite

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class NotFound:
    pass


@dataclass(frozen=True, slots=True)
class Failure:
    reason: str


GatewayResult = Union[Ok[T], NotFound, Failure]


async def gather_results(*calls: Awaitable[GatewayResult[Any]]) -> GatewayResult[tuple]:
    """
    Run independent gateway calls concurrently and join them.

    Returns ``Ok`` with the values in call order, or the first result that
    was not ``Ok``. There is no partial success.
    """
    results = await asyncio.gather(*calls)
    for result in results:
        if not isinstance(result, Ok):
            return result
    return Ok(tuple(r.value for r in results))


def is_task_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(t, dict) for t in value)


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    transport = httpx.AsyncHTTPTransport(retries=settings.backend_retries)
    return httpx.AsyncClient(
        base_url=settings.backend_url,
        timeout=settings.backend_timeout_seconds,
        transport=transport,
        headers={"Accept": "application/json"},
    )


class TaskGateway:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "TaskGateway":
        return cls(build_http_client(settings))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, path: str, **kwargs: Any) -> GatewayResult[Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            return Failure(f"{type(e).__name__}: {e}")

        if response.status_code == 404:
            logger.info("%s %s -> 404", method, path)
            return NotFound()
        if response.is_error:
            logger.error("%s %s -> HTTP %s", method, path, response.status_code)
            return Failure(f"HTTP {response.status_code}")

        if not response.content:
            return Ok(None)
        try:
            return Ok(response.json())
        except ValueError as e:
            logger.error("%s %s returned a non-JSON body: %s", method, path, e)
            return Failure("invalid JSON body")

    async def _call_task_list(self, path: str, **kwargs: Any) -> GatewayResult[list]:
        result = await self._call("GET", path, **kwargs)
        if isinstance(result, Ok) and not is_task_list(result.value):
            logger.error("GET %s returned a body that is not a list of tasks", path)
            return Failure("unexpected body")
        return result

    # ---- reads ----

    async def list_tasks(self) -> GatewayResult[list]:
        return await self._call_task_list("/api/tasks")

    async def get_task(self, task_id: str) -> GatewayResult[dict]:
        path = f"/api/tasks/{task_id}"
        result = await self._call("GET", path)
        if isinstance(result, Ok) and not isinstance(result.value, dict):
            logger.error("GET %s returned a body that is not a task", path)
            return Failure("unexpected body")
        return result

    async def list_tasks_by_status(self, status: str) -> GatewayResult[list]:
        return await self._call_task_list(f"/api/tasks/status/{status}")

    async def search_tasks(self, query: str) -> GatewayResult[list]:
        return await self._call_task_list("/api/tasks/search", params={"query": query})

    async def get_statistics(self) -> GatewayResult[dict]:
        return await self._call("GET", "/api/tasks/statistics")

    # ---- writes ----

    async def create_task(self, task: TaskWrite) -> GatewayResult[Any]:
        return await self._call("POST", "/api/tasks", json=task.model_dump(mode="json"))

    async def update_task(self, task_id: str, task: TaskWrite) -> GatewayResult[Any]:
        return await self._call("PUT", f"/api/tasks/{task_id}", json=task.model_dump(mode="json"))

    async def update_status(self, task_id: str, update: StatusUpdate) -> GatewayResult[Any]:
        return await self._call(
            "PATCH", f"/api/tasks/{task_id}/status", json=update.model_dump(mode="json")
        )

    async def delete_task(self, task_id: str) -> GatewayResult[Any]:
        return await self._call("DELETE", f"/api/tasks/{task_id}")

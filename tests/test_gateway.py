# tests/test_gateway.py

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone

import httpx
import pytest

from task_frontend.gateway import Failure, NotFound, Ok, TaskGateway, gather_results
from task_frontend.models import StatusUpdate, TaskStatus, TaskWrite


def gateway_for(handler) -> TaskGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://backend.test")
    return TaskGateway(client)


@pytest.mark.asyncio
async def test_ok_returns_decoded_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": 1, "title": "A"}])

    gateway = gateway_for(handler)
    result = await gateway.list_tasks()
    await gateway.aclose()

    assert result == Ok([{"id": 1, "title": "A"}])
    assert seen[0].method == "GET"
    assert seen[0].url.path == "/api/tasks"


@pytest.mark.asyncio
async def test_404_is_not_found() -> None:
    gateway = gateway_for(lambda request: httpx.Response(404))
    assert await gateway.get_task("999") == NotFound()


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 409, 500, 503])
async def test_other_error_statuses_are_failures(status_code: int) -> None:
    gateway = gateway_for(lambda request: httpx.Response(status_code, json={"error": "boom"}))
    result = await gateway.get_statistics()
    assert result == Failure(f"HTTP {status_code}")


@pytest.mark.asyncio
async def test_transport_error_is_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await gateway_for(handler).get_task("1")

    assert isinstance(result, Failure)
    assert "ConnectError" in result.reason


@pytest.mark.asyncio
async def test_non_json_body_is_failure() -> None:
    gateway = gateway_for(lambda request: httpx.Response(200, text="<html>oops</html>"))
    assert isinstance(await gateway.list_tasks(), Failure)


@pytest.mark.asyncio
async def test_empty_body_is_ok_none() -> None:
    gateway = gateway_for(lambda request: httpx.Response(204))
    assert await gateway.delete_task("1") == Ok(None)


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"content": []}, [{"id": 1}, None], "tasks"])
async def test_list_body_of_wrong_shape_is_failure(body) -> None:
    gateway = gateway_for(lambda request: httpx.Response(200, json=body))

    assert await gateway.list_tasks() == Failure("unexpected body")
    assert await gateway.list_tasks_by_status("TODO") == Failure("unexpected body")
    assert await gateway.search_tasks("milk") == Failure("unexpected body")


@pytest.mark.asyncio
async def test_task_body_that_is_not_an_object_is_failure() -> None:
    gateway = gateway_for(lambda request: httpx.Response(200, json=[{"id": 1}]))
    assert await gateway.get_task("1") == Failure("unexpected body")


@pytest.mark.asyncio
async def test_endpoints_and_payloads() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    gateway = gateway_for(handler)
    due = datetime(2027, 1, 2, 0, 0, tzinfo=timezone.utc)
    payload = TaskWrite(title="T", description="D", status=TaskStatus.IN_PROGRESS, dueDate=due)

    await gateway.list_tasks_by_status("COMPLETED")
    await gateway.search_tasks("milk & eggs")
    await gateway.create_task(payload)
    await gateway.update_task("5", payload)
    await gateway.update_status("5", StatusUpdate(status="COMPLETED"))
    await gateway.delete_task("5")

    assert [(r.method, r.url.path) for r in seen] == [
        ("GET", "/api/tasks/status/COMPLETED"),
        ("GET", "/api/tasks/search"),
        ("POST", "/api/tasks"),
        ("PUT", "/api/tasks/5"),
        ("PATCH", "/api/tasks/5/status"),
        ("DELETE", "/api/tasks/5"),
    ]
    assert seen[1].url.params["query"] == "milk & eggs"
    assert json.loads(seen[2].content) == {
        "title": "T",
        "description": "D",
        "status": "IN_PROGRESS",
        "dueDate": "2027-01-02T00:00:00Z",
    }
    assert json.loads(seen[4].content) == {"status": "COMPLETED"}


@pytest.mark.asyncio
async def test_gather_results_joins_values_in_order() -> None:
    async def slow() -> Ok:
        await asyncio.sleep(0.01)
        return Ok("tasks")

    async def fast() -> Ok:
        return Ok("stats")

    assert await gather_results(slow(), fast()) == Ok(("tasks", "stats"))


@pytest.mark.asyncio
async def test_gather_results_has_no_partial_success() -> None:
    async def ok() -> Ok:
        return Ok([1])

    async def down() -> Failure:
        return Failure("HTTP 500")

    assert await gather_results(ok(), down()) == Failure("HTTP 500")
    assert await gather_results(ok(), _missing()) == NotFound()


async def _missing() -> NotFound:
    return NotFound()

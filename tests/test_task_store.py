from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable

import pytest
import requests
import responses

from taskboard_client.models import ApiEnvelope, Task, TaskStatus
from taskboard_client.session import ApiSession
from taskboard_client.task_state import TaskState
from taskboard_client.task_store import TaskStore

from tests.helpers import BASE_URL, error_payload, task_payload


def _task(task_id: str, **overrides: object) -> Task:
    return Task.model_validate(task_payload(task_id, **overrides))


def _ids(store: TaskStore) -> list[str]:
    return [task.id for task in store.state.tasks]


async def _seed(store: TaskStore, mocked: responses.RequestsMock, *task_ids: str) -> None:
    mocked.add(
        responses.GET,
        f"{BASE_URL}/tasks",
        json={"success": True, "data": [task_payload(task_id) for task_id in task_ids]},
    )
    await store.fetch_tasks()
    mocked.reset()


@pytest.mark.asyncio
async def test_fetch_tasks_replaces_collection(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A", "B")

    await _seed(store, mocked, "C", "A")

    assert _ids(store) == ["C", "A"]
    assert store.state.loading is False
    assert store.state.error is None


@pytest.mark.asyncio
async def test_fetch_tasks_null_data_is_empty_collection(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A")
    mocked.add(responses.GET, f"{BASE_URL}/tasks", json={"success": True, "data": None})

    await store.fetch_tasks()

    assert store.state.tasks == ()


@pytest.mark.asyncio
async def test_fetch_tasks_network_failure_uses_fallback(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A")
    mocked.add(responses.GET, f"{BASE_URL}/tasks", body=requests.ConnectionError("refused"))

    await store.fetch_tasks()

    assert store.state.error == "Failed to fetch tasks"
    assert _ids(store) == ["A"]
    assert store.state.loading is False


@pytest.mark.asyncio
async def test_server_message_wins_over_fallback(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    mocked.add(responses.GET, f"{BASE_URL}/tasks", json=error_payload("Database error", 500), status=500)

    await store.fetch_tasks()

    assert store.state.error == "Database error"


@pytest.mark.asyncio
async def test_success_false_envelope_message_is_shown(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    mocked.add(responses.GET, f"{BASE_URL}/tasks/X1", json={"success": False, "error": "Task not found"})

    await store.fetch_task("X1")

    assert store.state.error == "Task not found"
    assert store.state.current_task is None


@pytest.mark.asyncio
async def test_fetch_task_sets_current_only(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A")
    mocked.add(responses.GET, f"{BASE_URL}/tasks/Z", json={"success": True, "data": task_payload("Z")})

    await store.fetch_task("Z")

    assert store.state.current_task is not None and store.state.current_task.id == "Z"
    assert _ids(store) == ["A"]


@pytest.mark.asyncio
async def test_empty_id_fails_locally(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)

    await store.fetch_task("")
    assert store.state.error == "Failed to fetch task"
    await store.delete_task("  ")
    assert store.state.error == "Failed to delete task"
    assert len(mocked.calls) == 0


@pytest.mark.asyncio
async def test_create_task_appends_returned_task(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A", "B")
    mocked.add(responses.POST, f"{BASE_URL}/tasks", json={"success": True, "data": task_payload("X1")}, status=201)

    await store.create_task({"title": "Buy milk", "description": ""})

    assert _ids(store) == ["A", "B", "X1"]
    assert store.state.tasks[-1] == _task("X1")
    assert store.state.loading is False


@pytest.mark.asyncio
async def test_create_task_invalid_input_reports_fallback(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)

    await store.create_task({"description": "missing title"})

    assert store.state.error == "Failed to create task"
    assert store.state.tasks == ()
    assert len(mocked.calls) == 0


@pytest.mark.asyncio
async def test_update_task_replaces_and_focuses(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A", "B")
    mocked.add(responses.PUT, f"{BASE_URL}/tasks/B", json={"success": True, "data": task_payload("B", title="Edited")})

    await store.update_task("B", {"title": "Edited"})

    assert _ids(store) == ["A", "B"]
    assert store.state.tasks[1].title == "Edited"
    assert store.state.current_task == store.state.tasks[1]


@pytest.mark.asyncio
async def test_update_task_failure_leaves_collection(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A")
    before = store.state.tasks
    mocked.add(responses.PUT, f"{BASE_URL}/tasks/A", json=error_payload("Access denied", 403), status=403)

    await store.update_task("A", {"title": "x"})

    assert store.state.tasks == before
    assert store.state.error == "Access denied"


@pytest.mark.asyncio
async def test_delete_current_task_clears_focus(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A", "B")
    mocked.add(responses.GET, f"{BASE_URL}/tasks/A", json={"success": True, "data": task_payload("A")})
    await store.fetch_task("A")
    mocked.add(responses.DELETE, f"{BASE_URL}/tasks/A", json={"success": True})

    await store.delete_task("A")

    assert _ids(store) == ["B"]
    assert store.state.current_task is None


@pytest.mark.asyncio
async def test_delete_other_task_keeps_focus(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A", "B")
    mocked.add(responses.GET, f"{BASE_URL}/tasks/A", json={"success": True, "data": task_payload("A")})
    await store.fetch_task("A")
    mocked.add(responses.DELETE, f"{BASE_URL}/tasks/B", json={"success": True})

    await store.delete_task("B")

    assert _ids(store) == ["A"]
    assert store.state.current_task is not None and store.state.current_task.id == "A"


@pytest.mark.asyncio
async def test_status_update_never_shows_loading(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A")
    mocked.add(
        responses.PATCH,
        f"{BASE_URL}/tasks/A/status",
        json={"success": True, "data": task_payload("A", status="completed")},
    )
    seen: list[TaskState] = []
    store.subscribe(seen.append)

    await store.update_task_status("A", TaskStatus.COMPLETED)

    assert [state.loading for state in seen] == [False]
    assert store.state.tasks[0].status is TaskStatus.COMPLETED


@pytest.mark.asyncio
async def test_update_task_does_show_loading(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    await _seed(store, mocked, "A")
    mocked.add(responses.PUT, f"{BASE_URL}/tasks/A", json={"success": True, "data": task_payload("A", title="t")})
    seen: list[TaskState] = []
    store.subscribe(seen.append)

    await store.update_task("A", {"title": "t"})

    assert [state.loading for state in seen] == [True, False]


@pytest.mark.asyncio
async def test_invalid_status_is_rejected_without_request(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)

    await store.update_task_status("A", "done")

    assert store.state.error == "Failed to update task status"
    assert len(mocked.calls) == 0


@pytest.mark.asyncio
async def test_clear_helpers(api: ApiSession, mocked: responses.RequestsMock) -> None:
    store = TaskStore(api)
    mocked.add(responses.GET, f"{BASE_URL}/tasks/A", json={"success": True, "data": task_payload("A")})
    await store.fetch_task("A")
    await store.delete_task("")

    store.clear_error()
    assert store.state.error is None
    assert store.state.current_task is not None

    store.clear_current_task()
    assert store.state.current_task is None


@dataclass
class GatedApi:
    """Releases each awaited call only when the test says so."""

    gates: dict[str, asyncio.Event] = field(default_factory=dict)

    def gate(self, name: str) -> asyncio.Event:
        return self.gates.setdefault(name, asyncio.Event())

    async def call(self, func: Callable[..., Any], *args: Any) -> Any:
        await self.gate(func.__name__).wait()
        return func(*args)


@dataclass
class FakeTaskClient:
    listed: list[Task]
    status_result: Task

    def list_tasks(self) -> ApiEnvelope[list[Task]]:
        return ApiEnvelope[list[Task]](success=True, data=self.listed)

    def update_task_status(self, task_id: str, status: str) -> ApiEnvelope[Task]:
        return ApiEnvelope[Task](success=True, data=self.status_result)


@pytest.mark.asyncio
async def test_concurrent_operations_last_response_wins() -> None:
    api = GatedApi()
    client = FakeTaskClient(listed=[_task("A", status="pending")], status_result=_task("A", status="completed"))
    store = TaskStore(api, client=client)  # type: ignore[arg-type]
    fetch = asyncio.create_task(store.fetch_tasks())
    status = asyncio.create_task(store.update_task_status("A", "completed"))
    await asyncio.sleep(0)
    assert store.state.loading is True

    api.gate("update_task_status").set()
    await status
    assert store.state.loading is True
    assert store.state.current_task is not None

    api.gate("list_tasks").set()
    await fetch

    assert store.state.loading is False
    assert store.state.tasks[0].status is TaskStatus.PENDING


@pytest.mark.asyncio
async def test_late_response_after_close_is_ignored() -> None:
    api = GatedApi()
    client = FakeTaskClient(listed=[_task("A")], status_result=_task("A"))
    store = TaskStore(api, client=client)  # type: ignore[arg-type]

    fetch = asyncio.create_task(store.fetch_tasks())
    await asyncio.sleep(0)
    store.close()
    api.gate("list_tasks").set()
    await fetch

    assert store.state.tasks == ()
    assert store.closed

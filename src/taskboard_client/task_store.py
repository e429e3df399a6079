from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .base_store import ObservableStore
from .clients.tasks import TaskClient
from .models import ApiEnvelope, CreateTaskRequest, TaskStatus, UpdateTaskRequest
from .session import ApiSession
from .task_state import (
    ClearCurrentTask,
    ClearTaskError,
    TaskAction,
    TaskCreated,
    TaskDeleted,
    TaskLoaded,
    TasksFailed,
    TasksLoaded,
    TasksLoading,
    TaskState,
    TaskUpdated,
    reduce_tasks,
)
from .ui_errors import (
    CREATE_TASK_FAILED,
    DELETE_TASK_FAILED,
    FETCH_TASK_FAILED,
    FETCH_TASKS_FAILED,
    UPDATE_TASK_FAILED,
    UPDATE_TASK_STATUS_FAILED,
    envelope_error,
    exception_error,
)

logger = logging.getLogger(__name__)


class TaskStore(ObservableStore[TaskState, TaskAction]):
    """In-memory task collection plus the task focused by a detail view.

    Operations never raise: a failure leaves the collection untouched and
    records a message in ``state.error``. Concurrent operations are not
    sequenced; whichever response lands last decides the final state.
    """

    def __init__(self, api: ApiSession, client: TaskClient | None = None) -> None:
        super().__init__(TaskState(), reduce_tasks)
        self.api = api
        self.client = client or api.task_client()

    async def fetch_tasks(self) -> None:
        envelope = await self._run("fetch_tasks", FETCH_TASKS_FAILED, self.client.list_tasks)
        if envelope is None:
            return
        # the server encodes an empty collection as null
        self._dispatch(TasksLoaded(tuple(envelope.data or ())))

    async def fetch_task(self, task_id: str) -> None:
        if not self._check_id("fetch_task", task_id, FETCH_TASK_FAILED):
            return
        envelope = await self._run(
            "fetch_task", FETCH_TASK_FAILED, self.client.get_task, task_id, require_data=True
        )
        if envelope is not None:
            self._dispatch(TaskLoaded(envelope.data))

    async def create_task(self, data: CreateTaskRequest | Mapping[str, Any]) -> None:
        envelope = await self._run(
            "create_task", CREATE_TASK_FAILED, self.client.create_task, data, require_data=True
        )
        if envelope is not None:
            self._dispatch(TaskCreated(envelope.data))

    async def update_task(self, task_id: str, patch: UpdateTaskRequest | Mapping[str, Any]) -> None:
        if not self._check_id("update_task", task_id, UPDATE_TASK_FAILED):
            return
        envelope = await self._run(
            "update_task", UPDATE_TASK_FAILED, self.client.update_task, task_id, patch, require_data=True
        )
        if envelope is not None:
            self._dispatch(TaskUpdated(envelope.data))

    async def delete_task(self, task_id: str) -> None:
        if not self._check_id("delete_task", task_id, DELETE_TASK_FAILED):
            return
        envelope = await self._run("delete_task", DELETE_TASK_FAILED, self.client.delete_task, task_id)
        if envelope is not None:
            self._dispatch(TaskDeleted(task_id))

    async def update_task_status(self, task_id: str, status: TaskStatus | str) -> None:
        """Inline status change; ``state.loading`` is never raised for it."""
        if not self._check_id("update_task_status", task_id, UPDATE_TASK_STATUS_FAILED):
            return
        envelope = await self._run(
            "update_task_status",
            UPDATE_TASK_STATUS_FAILED,
            self.client.update_task_status,
            task_id,
            status,
            require_data=True,
            track_loading=False,
        )
        if envelope is not None:
            self._dispatch(TaskUpdated(envelope.data, settles_loading=False))

    def clear_current_task(self) -> None:
        self._dispatch(ClearCurrentTask())

    def clear_error(self) -> None:
        self._dispatch(ClearTaskError())

    def _check_id(self, operation: str, task_id: str, fallback: str) -> bool:
        if task_id and task_id.strip():
            return True
        logger.warning(f"{operation}_invalid_id")
        self._dispatch(TasksFailed(fallback, settles_loading=False))
        return False

    async def _run(
        self,
        operation: str,
        fallback: str,
        call: Callable[..., ApiEnvelope[Any]],
        *args: Any,
        require_data: bool = False,
        track_loading: bool = True,
    ) -> ApiEnvelope[Any] | None:
        if track_loading:
            self._dispatch(TasksLoading())
        try:
            envelope = await self.api.call(call, *args)
        except Exception as exc:
            logger.warning(f"tasks_{operation}_failure", extra={"error": type(exc).__name__})
            self._dispatch(TasksFailed(exception_error(exc, fallback), settles_loading=track_loading))
            return None
        if not envelope.success or (require_data and envelope.data is None):
            logger.info(f"tasks_{operation}_rejected", extra={"code": envelope.code})
            self._dispatch(TasksFailed(envelope_error(envelope, fallback), settles_loading=track_loading))
            return None
        logger.debug(f"tasks_{operation}_success")
        return envelope

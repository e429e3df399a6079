from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel

from ..models import (
    ApiEnvelope,
    CreateTaskRequest,
    Task,
    TaskStatus,
    TaskStatusUpdate,
    UpdateTaskRequest,
)
from .base import BaseClient, expect_object

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class TaskClient(BaseClient):
    module: str = "tasks"

    def list_tasks(self) -> ApiEnvelope[list[Task]]:
        data = self._request("GET", "/tasks", operation="list_tasks")
        return ApiEnvelope[list[Task]].model_validate(expect_object(data, "list tasks"))

    def get_task(self, task_id: str) -> ApiEnvelope[Task]:
        data = self._request("GET", f"/tasks/{task_id}", operation="get_task")
        return ApiEnvelope[Task].model_validate(expect_object(data, "task"))

    def create_task(self, payload: CreateTaskRequest | Mapping[str, Any]) -> ApiEnvelope[Task]:
        request = _coerce_model(payload, CreateTaskRequest)
        data = self._request(
            "POST",
            "/tasks",
            json_body=request.model_dump(mode="json", exclude_none=True),
            operation="create_task",
        )
        return ApiEnvelope[Task].model_validate(expect_object(data, "create task"))

    def update_task(self, task_id: str, payload: UpdateTaskRequest | Mapping[str, Any]) -> ApiEnvelope[Task]:
        request = _coerce_model(payload, UpdateTaskRequest)
        data = self._request(
            "PUT",
            f"/tasks/{task_id}",
            json_body=request.model_dump(mode="json", exclude_unset=True),
            operation="update_task",
        )
        return ApiEnvelope[Task].model_validate(expect_object(data, "update task"))

    def delete_task(self, task_id: str) -> ApiEnvelope[Any]:
        data = self._request("DELETE", f"/tasks/{task_id}", operation="delete_task")
        if data is None:
            return ApiEnvelope[Any](success=True)
        return ApiEnvelope[Any].model_validate(expect_object(data, "delete task"))

    def update_task_status(self, task_id: str, status: TaskStatus | str) -> ApiEnvelope[Task]:
        request = TaskStatusUpdate(status=status)
        data = self._request(
            "PATCH",
            f"/tasks/{task_id}/status",
            json_body=request.model_dump(mode="json"),
            operation="update_task_status",
        )
        return ApiEnvelope[Task].model_validate(expect_object(data, "task status"))


def _coerce_model(payload: ModelT | Mapping[str, Any], model: type[ModelT]) -> ModelT:
    if isinstance(payload, model):
        return payload
    return model.model_validate(payload)

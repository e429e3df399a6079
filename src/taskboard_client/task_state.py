from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from .models import Task


@dataclass(frozen=True)
class TaskState:
    tasks: tuple[Task, ...] = ()
    current_task: Task | None = None
    loading: bool = False
    error: str | None = None

    def find(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


@dataclass(frozen=True)
class TasksLoading:
    pass


@dataclass(frozen=True)
class TasksLoaded:
    tasks: tuple[Task, ...]


@dataclass(frozen=True)
class TaskLoaded:
    task: Task


@dataclass(frozen=True)
class TasksFailed:
    error: str
    settles_loading: bool = True


@dataclass(frozen=True)
class TaskCreated:
    task: Task


@dataclass(frozen=True)
class TaskUpdated:
    task: Task
    # inline status changes leave the busy flag to whatever else is in flight
    settles_loading: bool = True


@dataclass(frozen=True)
class TaskDeleted:
    task_id: str


@dataclass(frozen=True)
class ClearTaskError:
    pass


@dataclass(frozen=True)
class ClearCurrentTask:
    pass


TaskAction = Union[
    TasksLoading,
    TasksLoaded,
    TaskLoaded,
    TasksFailed,
    TaskCreated,
    TaskUpdated,
    TaskDeleted,
    ClearTaskError,
    ClearCurrentTask,
]


def _dedupe(tasks: tuple[Task, ...]) -> tuple[Task, ...]:
    # first occurrence keeps its position, later duplicates overwrite its value
    positions: dict[str, int] = {}
    result: list[Task] = []
    for task in tasks:
        if task.id in positions:
            result[positions[task.id]] = task
            continue
        positions[task.id] = len(result)
        result.append(task)
    return tuple(result)


def _replace_task(tasks: tuple[Task, ...], updated: Task) -> tuple[Task, ...]:
    return tuple(updated if task.id == updated.id else task for task in tasks)


def reduce_tasks(state: TaskState, action: TaskAction) -> TaskState:
    if isinstance(action, TasksLoading):
        return replace(state, loading=True, error=None)
    if isinstance(action, TasksLoaded):
        return replace(state, loading=False, tasks=_dedupe(tuple(action.tasks)))
    if isinstance(action, TaskLoaded):
        return replace(state, loading=False, current_task=action.task)
    if isinstance(action, TasksFailed):
        loading = False if action.settles_loading else state.loading
        return replace(state, loading=loading, error=action.error)
    if isinstance(action, TaskCreated):
        if state.find(action.task.id) is not None:
            return replace(state, loading=False, tasks=_replace_task(state.tasks, action.task))
        return replace(state, loading=False, tasks=(*state.tasks, action.task))
    if isinstance(action, TaskUpdated):
        return replace(
            state,
            loading=False if action.settles_loading else state.loading,
            tasks=_replace_task(state.tasks, action.task),
            current_task=action.task,
        )
    if isinstance(action, TaskDeleted):
        current = state.current_task
        if current is not None and current.id == action.task_id:
            current = None
        return replace(
            state,
            loading=False,
            tasks=tuple(task for task in state.tasks if task.id != action.task_id),
            current_task=current,
        )
    if isinstance(action, ClearTaskError):
        return replace(state, error=None)
    if isinstance(action, ClearCurrentTask):
        return replace(state, current_task=None)
    raise TypeError(f"Unknown task action: {action!r}")

from .auth_store import AuthStore
from .bootstrap import AppState, Route, TaskboardApp
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    CorruptSessionError,
    ForbiddenError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .models import (
    ApiEnvelope,
    AuthResponse,
    CreateTaskRequest,
    Task,
    TaskPriority,
    TaskStatus,
    UpdateTaskRequest,
    User,
    UserRole,
)
from .session import ApiSession
from .session_state import SessionState, reduce_session
from .session_store import SessionStore
from .task_state import TaskState, reduce_tasks
from .task_store import TaskStore

__all__ = [
    "ApiEnvelope",
    "ApiError",
    "ApiSession",
    "AppState",
    "AuthResponse",
    "AuthStore",
    "ClientConfig",
    "ConfigError",
    "CorruptSessionError",
    "CreateTaskRequest",
    "ForbiddenError",
    "HttpClient",
    "NotFoundError",
    "Route",
    "SessionState",
    "SessionStore",
    "Task",
    "TaskPriority",
    "TaskState",
    "TaskStatus",
    "TaskStore",
    "TaskboardApp",
    "TransportError",
    "UnauthorizedError",
    "UpdateTaskRequest",
    "User",
    "UserRole",
    "ValidationError",
    "load_config",
    "reduce_session",
    "reduce_tasks",
]

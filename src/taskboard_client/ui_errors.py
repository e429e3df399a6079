from __future__ import annotations

from .exceptions import ApiError
from .models import ApiEnvelope

LOGIN_FAILED = "Login failed"
REGISTRATION_FAILED = "Registration failed"
REFRESH_FAILED = "Token refresh failed"
FETCH_TASKS_FAILED = "Failed to fetch tasks"
FETCH_TASK_FAILED = "Failed to fetch task"
CREATE_TASK_FAILED = "Failed to create task"
UPDATE_TASK_FAILED = "Failed to update task"
DELETE_TASK_FAILED = "Failed to delete task"
UPDATE_TASK_STATUS_FAILED = "Failed to update task status"


def envelope_error(envelope: ApiEnvelope, fallback: str) -> str:
    """Message for a response that arrived but reported ``success=false``."""
    if envelope.error and envelope.error.strip():
        return envelope.error
    return fallback


def exception_error(exc: Exception, fallback: str) -> str:
    """Message for a call that raised.

    Only the ``error`` string of a structured error body is shown; network
    failures and bodies without one fall back to the operation default.
    """
    if isinstance(exc, ApiError):
        server_error = exc.server_error
        if server_error:
            return server_error
    return fallback

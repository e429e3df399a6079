from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .config import ClientConfig, load_config
from .session import ApiSession
from .session_state import SessionState
from .session_store import SessionStore
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class Route(str, Enum):
    LOGIN = "login"
    TASKS = "tasks"


@dataclass
class AppState:
    route: Route = Route.LOGIN
    status_message: str = "Ready"


class TaskboardApp:
    """Composition root handed to presentation code.

    Owns one ``ApiSession`` shared by both stores. The route follows the
    session: an authenticated session lands on the task list, anything
    else (logout, a 401 from any endpoint) goes back to login.
    """

    def __init__(self, config: ClientConfig | None = None, api: ApiSession | None = None) -> None:
        self.config = config or load_config()
        self.api = api or ApiSession(self.config)
        self.state = AppState()
        self.session = SessionStore(self.api)
        self.tasks = TaskStore(self.api)
        self._remove_unauthorized_handler = self.api.on_unauthorized(self._on_unauthorized)
        self._unsubscribe_session = self.session.subscribe(self._on_session_change)

    def start(self) -> Route:
        if self.session.state.is_authenticated:
            self._navigate(Route.TASKS, "Session restored")
        else:
            self._navigate(Route.LOGIN, "No active session")
        return self.state.route

    def check_health(self) -> bool:
        try:
            envelope = self.api.call_sync(self.api.health_client().health)
        except Exception:
            logger.exception("health_check_failure")
            return False
        if not envelope.success:
            logger.warning("health_check_unhealthy", extra={"error": envelope.error})
        return envelope.success

    def close(self) -> None:
        self._unsubscribe_session()
        self._remove_unauthorized_handler()
        self.tasks.close()
        self.session.close()

    def _on_session_change(self, state: SessionState) -> None:
        if state.is_authenticated and self.state.route is not Route.TASKS:
            self._navigate(Route.TASKS, "Authenticated")
        elif not state.is_authenticated and state.token is None and self.state.route is not Route.LOGIN:
            self._navigate(Route.LOGIN, "Session cleared")

    def _on_unauthorized(self) -> None:
        self.tasks.clear_current_task()
        self._navigate(Route.LOGIN, "Session expired")

    def _navigate(self, route: Route, status_message: str) -> None:
        logger.info("navigation", extra={"route": route.value})
        self.state.route = route
        self.state.status_message = status_message

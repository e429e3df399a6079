from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, TypeVar

import requests

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.health import HealthClient
from .clients.tasks import TaskClient
from .config import ClientConfig
from .exceptions import UnauthorizedError
from .http_client import HttpClient

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")
UnauthorizedHandler = Callable[[], None]


@dataclass
class ApiSession:
    """Shared transport for both stores.

    Every outgoing request carries the persisted bearer token; a 401 from any
    endpoint purges the persisted session and notifies the registered
    unauthorized handlers.
    """

    config: ClientConfig
    auth_store: AuthStore | None = None
    http: HttpClient | None = None
    _unauthorized_handlers: list[UnauthorizedHandler] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.auth_store is None:
            base_dir = Path(self.config.data_dir) if self.config.data_dir else None
            self.auth_store = AuthStore(base_dir=base_dir)
        if self.http is None:
            self.http = HttpClient(config=self.config)
        self.http.before_request = self._inject_auth_header
        self.http.after_response = self._detect_unauthorized

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http)

    def task_client(self) -> TaskClient:
        return TaskClient(http=self.http)

    def health_client(self) -> HealthClient:
        return HealthClient(http=self.http)

    def on_unauthorized(self, handler: UnauthorizedHandler) -> Callable[[], None]:
        self._unauthorized_handlers.append(handler)

        def remove() -> None:
            if handler in self._unauthorized_handlers:
                self._unauthorized_handlers.remove(handler)

        return remove

    async def call(self, func: Callable[..., ResultT], *args: Any, **kwargs: Any) -> ResultT:
        """Run a blocking client call off the event loop.

        Unauthorized handlers run back on the loop thread, before the error
        reaches the caller.
        """
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except UnauthorizedError:
            self._notify_unauthorized()
            raise

    def call_sync(self, func: Callable[..., ResultT], *args: Any, **kwargs: Any) -> ResultT:
        """Blocking counterpart of ``call`` for code already off the event loop."""
        try:
            return func(*args, **kwargs)
        except UnauthorizedError:
            self._notify_unauthorized()
            raise

    def _inject_auth_header(self, method: str, url: str, context: dict[str, Any]) -> None:
        token = self.auth_store.token()
        if token:
            context["headers"].setdefault("Authorization", f"Bearer {token}")

    def _detect_unauthorized(self, response: requests.Response) -> None:
        if response.status_code != 401:
            return
        logger.warning("session_unauthorized", extra={"url": response.url})
        try:
            self.auth_store.clear()
        except OSError:
            logger.exception("session_purge_failure")

    def _notify_unauthorized(self) -> None:
        for handler in list(self._unauthorized_handlers):
            handler()

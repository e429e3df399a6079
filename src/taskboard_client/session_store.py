from __future__ import annotations

import logging
from typing import Callable

from .base_store import ObservableStore
from .exceptions import CorruptSessionError
from .models import ApiEnvelope, AuthResponse
from .session import ApiSession
from .session_state import (
    ANONYMOUS,
    AuthFailure,
    AuthStart,
    AuthSuccess,
    ClearError,
    Logout,
    SessionAction,
    SessionState,
    reduce_session,
)
from .ui_errors import (
    LOGIN_FAILED,
    REFRESH_FAILED,
    REGISTRATION_FAILED,
    envelope_error,
    exception_error,
)

logger = logging.getLogger(__name__)


class SessionStore(ObservableStore[SessionState, SessionAction]):
    """Current user identity and bearer token.

    The persisted ``token``/``user`` entries are restored on construction
    without any network call. Every transition that changes the token writes
    or clears durable storage first, in the same step as the in-memory
    update.
    """

    def __init__(self, api: ApiSession) -> None:
        super().__init__(ANONYMOUS, reduce_session)
        self.api = api
        self._hydrate()
        self._remove_unauthorized_handler = api.on_unauthorized(self.handle_unauthorized)

    def _hydrate(self) -> None:
        try:
            stored = self.api.auth_store.load()
        except (CorruptSessionError, OSError):
            logger.warning("session_restore_corrupt")
            self._purge_storage()
            return
        if stored is None:
            return
        logger.info("session_restored", extra={"user_id": stored.user.id})
        self._dispatch(AuthSuccess(user=stored.user, token=stored.token))

    async def login(self, email: str, password: str) -> None:
        await self._authenticate("login", LOGIN_FAILED, self.api.auth_client().login, email, password)

    async def register(self, email: str, password: str) -> None:
        await self._authenticate(
            "register", REGISTRATION_FAILED, self.api.auth_client().register, email, password
        )

    async def refresh(self) -> None:
        await self._authenticate("refresh", REFRESH_FAILED, self.api.auth_client().refresh)

    async def logout(self) -> None:
        logger.info("logout")
        try:
            envelope = await self.api.call(self.api.auth_client().logout)
            if not envelope.success:
                logger.warning("logout_rejected", extra={"error": envelope.error})
        except Exception:
            logger.exception("logout_error")
        finally:
            self._reset()

    def clear_error(self) -> None:
        self._dispatch(ClearError())

    def handle_unauthorized(self) -> None:
        logger.info("session_invalidated")
        self._reset()

    def close(self) -> None:
        self._remove_unauthorized_handler()
        super().close()

    async def _authenticate(
        self,
        operation: str,
        fallback: str,
        call: Callable[..., ApiEnvelope[AuthResponse]],
        *args: str,
    ) -> None:
        self._dispatch(AuthStart())
        logger.info(f"{operation}_attempt")
        try:
            envelope = await self.api.call(call, *args)
        except Exception as exc:
            logger.warning(f"{operation}_failure", extra={"error": type(exc).__name__})
            self._dispatch(AuthFailure(exception_error(exc, fallback)))
            return
        if not envelope.success or envelope.data is None:
            logger.info(f"{operation}_rejected", extra={"code": envelope.code})
            self._dispatch(AuthFailure(envelope_error(envelope, fallback)))
            return
        if self._establish(envelope.data, fallback):
            logger.info(f"{operation}_success", extra={"user_id": envelope.data.user_id})

    def _establish(self, auth: AuthResponse, fallback: str) -> bool:
        if self.closed:
            return False
        user = auth.to_user()
        try:
            self.api.auth_store.save(auth.token, user)
        except OSError:
            # the token is only adopted once it is persisted
            logger.exception("session_persist_failure")
            self._purge_storage()
            self._dispatch(AuthFailure(fallback))
            return False
        self._dispatch(AuthSuccess(user=user, token=auth.token))
        return True

    def _reset(self) -> None:
        self._purge_storage()
        self._dispatch(Logout())

    def _purge_storage(self) -> None:
        try:
            self.api.auth_store.clear()
        except OSError:
            logger.exception("session_purge_failure")

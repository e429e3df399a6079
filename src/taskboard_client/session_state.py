from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from .models import User


@dataclass(frozen=True)
class SessionState:
    user: User | None = None
    token: str | None = None
    is_authenticated: bool = False
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True)
class AuthStart:
    pass


@dataclass(frozen=True)
class AuthSuccess:
    user: User
    token: str


@dataclass(frozen=True)
class AuthFailure:
    error: str


@dataclass(frozen=True)
class Logout:
    pass


@dataclass(frozen=True)
class ClearError:
    pass


SessionAction = Union[AuthStart, AuthSuccess, AuthFailure, Logout, ClearError]

ANONYMOUS = SessionState()


def reduce_session(state: SessionState, action: SessionAction) -> SessionState:
    if isinstance(action, AuthStart):
        return replace(state, loading=True, error=None)
    if isinstance(action, AuthSuccess):
        return replace(
            state,
            user=action.user,
            token=action.token,
            is_authenticated=True,
            loading=False,
            error=None,
        )
    if isinstance(action, AuthFailure):
        # user and token keep their previous values
        return replace(state, loading=False, error=action.error, is_authenticated=False)
    if isinstance(action, Logout):
        return ANONYMOUS
    if isinstance(action, ClearError):
        return replace(state, error=None)
    raise TypeError(f"Unknown session action: {action!r}")

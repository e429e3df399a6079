from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"

    @property
    def server_error(self) -> str | None:
        """The ``error`` string of the envelope carried by a failed response, if any."""
        if isinstance(self.raw_payload, dict):
            value = self.raw_payload.get("error")
            if isinstance(value, str) and value.strip():
                return value
        return None


class UnauthorizedError(ApiError):
    """Missing, expired or revoked bearer token."""


class ForbiddenError(ApiError):
    """Task belongs to another user and the caller is not an admin."""


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class CorruptSessionError(Exception):
    """Persisted session data could not be decoded."""

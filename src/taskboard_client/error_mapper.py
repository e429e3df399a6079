from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)

STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def error_class_for(status_code: int) -> type[ApiError]:
    if status_code >= 500:
        return ServerError
    return STATUS_ERRORS.get(status_code, ApiError)


def map_error(status_code: int, payload: Mapping[str, object] | None) -> ApiError:
    """Build the typed error for a failed response from its envelope body."""
    body = dict(payload or {})
    return error_class_for(status_code)(
        code=str(body.get("code") or f"HTTP_{status_code}"),
        message=str(body.get("error") or body.get("message") or f"HTTP {status_code}"),
        details=body.get("details"),
        status_code=status_code,
        raw_payload=body,
    )

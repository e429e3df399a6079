"""Client settings, read from ``TASKBOARD_*`` variables and an optional ``.env`` file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

PREFIX = "TASKBOARD_"
DEFAULT_API_BASE_URL = "http://localhost:8000"

ValueT = TypeVar("ValueT")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    timeout_seconds: float = 10.0
    retries: int = 3
    retry_backoff_seconds: float = 0.3
    verify_ssl: bool = True
    data_dir: str | None = None


def _setting(key: str) -> str | None:
    return os.getenv(PREFIX + key, "").strip() or None


def _flag(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise ValueError(raw)


def _parsed(
    key: str,
    default: ValueT,
    parse: Callable[[str], ValueT],
    accept: Callable[[ValueT], bool],
    expected: str,
) -> ValueT:
    raw = _setting(key)
    if raw is None:
        return default
    try:
        value = parse(raw)
    except ValueError as exc:
        raise ConfigError(f"{PREFIX}{key}={raw!r} is not {expected}") from exc
    if not accept(value):
        raise ConfigError(f"{PREFIX}{key}={raw!r} is not {expected}")
    return value


def _base_url(env_name: str) -> str:
    url = _setting(f"API_BASE_URL_{env_name.upper()}") or _setting("API_BASE_URL") or DEFAULT_API_BASE_URL
    if not url.startswith(("http://", "https://")):
        raise ConfigError(f"{PREFIX}API_BASE_URL={url!r} is not an http(s) URL")
    return url.rstrip("/")


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the client settings.

    Values already present in the environment win over the ``.env`` file. An
    environment-specific base URL (``TASKBOARD_API_BASE_URL_STAGING``) wins
    over the generic one.
    """
    load_dotenv(env_file)
    env_name = _setting("ENV") or "dev"
    return ClientConfig(
        env_name=env_name,
        api_base_url=_base_url(env_name),
        timeout_seconds=_parsed("TIMEOUT_SECONDS", 10.0, float, lambda v: v > 0, "a positive number"),
        retries=_parsed("RETRIES", 3, int, lambda v: v >= 0, "a non-negative integer"),
        retry_backoff_seconds=_parsed(
            "RETRY_BACKOFF_SECONDS", 0.3, float, lambda v: v >= 0, "a non-negative number"
        ),
        verify_ssl=_parsed("VERIFY_SSL", True, _flag, lambda v: True, "a boolean flag"),
        data_dir=_setting("DATA_DIR"),
    )

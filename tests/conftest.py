from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
import responses

from taskboard_client.auth_store import AuthStore
from taskboard_client.config import ClientConfig
from taskboard_client.models import User, UserRole
from taskboard_client.session import ApiSession

from tests.helpers import BASE_URL


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "TASKBOARD_ENV",
        "TASKBOARD_API_BASE_URL",
        "TASKBOARD_API_BASE_URL_DEV",
        "TASKBOARD_TIMEOUT_SECONDS",
        "TASKBOARD_RETRIES",
        "TASKBOARD_RETRY_BACKOFF_SECONDS",
        "TASKBOARD_VERIFY_SSL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TASKBOARD_DATA_DIR", str(tmp_path / "data"))


@pytest.fixture()
def config(tmp_path: Path) -> ClientConfig:
    return ClientConfig(
        env_name="test",
        api_base_url=BASE_URL,
        retries=0,
        retry_backoff_seconds=0,
        data_dir=str(tmp_path / "session"),
    )


@pytest.fixture()
def auth_store(tmp_path: Path) -> AuthStore:
    return AuthStore(base_dir=tmp_path / "session")


@pytest.fixture()
def api(config: ClientConfig, auth_store: AuthStore) -> ApiSession:
    return ApiSession(config, auth_store=auth_store)


@pytest.fixture()
def user() -> User:
    return User(id="U1", email="a@b.com", role=UserRole.USER)


@pytest.fixture()
def mocked() -> Iterator[responses.RequestsMock]:
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps

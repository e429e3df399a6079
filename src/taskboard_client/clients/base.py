from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient


@dataclass
class BaseClient:
    http: HttpClient
    module: str = "unknown"

    def _request(self, method: str, path: str, **kwargs: Any):
        kwargs.setdefault("module", self.module)
        return self.http.request(method, path, **kwargs)


def expect_object(data: object, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"Expected {what} response to be a JSON object")
    return data

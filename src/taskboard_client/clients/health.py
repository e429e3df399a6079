from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models import ApiEnvelope
from .base import BaseClient, expect_object


@dataclass
class HealthClient(BaseClient):
    module: str = "health"

    def health(self) -> ApiEnvelope[dict[str, Any]]:
        data = self._request("GET", "/health", operation="health")
        return ApiEnvelope[dict[str, Any]].model_validate(expect_object(data, "health"))

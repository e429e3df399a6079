from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models import ApiEnvelope, AuthResponse, LoginRequest, RegisterRequest
from .base import BaseClient, expect_object


@dataclass
class AuthClient(BaseClient):
    module: str = "auth"

    def login(self, email: str, password: str) -> ApiEnvelope[AuthResponse]:
        payload = LoginRequest(email=email, password=password)
        data = self._request("POST", "/login", json_body=payload.model_dump(), operation="login")
        return ApiEnvelope[AuthResponse].model_validate(expect_object(data, "login"))

    def register(self, email: str, password: str) -> ApiEnvelope[AuthResponse]:
        payload = RegisterRequest(email=email, password=password)
        data = self._request("POST", "/register", json_body=payload.model_dump(), operation="register")
        return ApiEnvelope[AuthResponse].model_validate(expect_object(data, "register"))

    def logout(self) -> ApiEnvelope[dict[str, Any]]:
        data = self._request("POST", "/logout", operation="logout")
        if data is None:
            return ApiEnvelope[dict[str, Any]](success=True)
        return ApiEnvelope[dict[str, Any]].model_validate(expect_object(data, "logout"))

    def refresh(self) -> ApiEnvelope[AuthResponse]:
        data = self._request("POST", "/refresh", operation="refresh")
        return ApiEnvelope[AuthResponse].model_validate(expect_object(data, "refresh"))

from __future__ import annotations

BASE_URL = "https://api.example.com"


def task_payload(task_id: str = "X1", **overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": task_id,
        "title": "Buy milk",
        "description": "",
        "status": "pending",
        "priority": "medium",
        "due_date": None,
        "created_by": "U1",
        "created_at": "2024-05-01T10:00:00Z",
        "updated_at": "2024-05-01T10:00:00Z",
    }
    payload.update(overrides)
    return payload


def auth_payload(
    token: str = "T1",
    user_id: str = "U1",
    email: str = "a@b.com",
    role: str = "user",
) -> dict[str, object]:
    return {"success": True, "data": {"token": token, "user_id": user_id, "email": email, "role": role}}


def error_payload(message: str, code: int = 400) -> dict[str, object]:
    return {"success": False, "error": message, "code": code}

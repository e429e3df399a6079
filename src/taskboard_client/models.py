from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, field_validator

T = TypeVar("T")

# Go encodes an unset time.Time as its zero value rather than null.
_ZERO_DATE_PREFIX = "0001-01-01"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ApiEnvelope(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: str | None = None
    code: int | None = None


class User(BaseModel):
    id: str
    email: str
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


class AuthResponse(BaseModel):
    token: str
    user_id: str
    email: str
    role: UserRole = UserRole.USER

    def to_user(self) -> User:
        return User(id=self.user_id, email=self.email, role=self.role)


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    password: str


def _parse_due_date(value: object) -> object:
    if isinstance(value, str):
        text = value.strip()
        if not text or text.startswith(_ZERO_DATE_PREFIX):
            return None
        return text[:10]
    return value


class Task(BaseModel):
    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    created_by: str
    created_at: str | None = None
    updated_at: str | None = None

    model_config = {"frozen": True}

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, value: object) -> object:
        return _parse_due_date(value)


class CreateTaskRequest(BaseModel):
    title: str
    description: str
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, value: object) -> object:
        return _parse_due_date(value)


class UpdateTaskRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, value: object) -> object:
        return _parse_due_date(value)


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class StoredSession(BaseModel):
    token: str
    user: User

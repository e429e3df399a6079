from .auth import AuthClient
from .base import BaseClient
from .health import HealthClient
from .tasks import TaskClient

__all__ = ["AuthClient", "BaseClient", "HealthClient", "TaskClient"]

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import ValidationError as ModelValidationError

from .exceptions import CorruptSessionError
from .models import StoredSession, User

TOKEN_KEY = "token"
USER_KEY = "user"


@dataclass
class AuthStore:
    """Durable ``token``/``user`` entries, written together and cleared together.

    The user entry holds the serialized ``User`` record as a JSON string so the
    two entries stay independent key-value pairs on disk.
    """

    app_name: str = "taskboard"
    filename: str = "session.json"
    base_dir: Path | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def _path(self) -> Path:
        base = self.base_dir or Path(user_data_dir(self.app_name, "Taskboard"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def save(self, token: str, user: User) -> None:
        data = {TOKEN_KEY: token, USER_KEY: user.model_dump_json()}
        with self._lock:
            path = self._path()
            path.write_text(json.dumps(data, indent=2))
            try:
                path.chmod(0o600)
            except OSError:
                pass

    def _read_entries(self) -> dict[str, object] | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise CorruptSessionError(f"Unreadable session file {path}") from exc
        if not isinstance(data, dict):
            raise CorruptSessionError(f"Unexpected session file layout in {path}")
        return data

    def load(self) -> StoredSession | None:
        """Return the persisted session, ``None`` when absent.

        Raises ``CorruptSessionError`` when the entries exist but cannot be
        decoded, or when only one of the two entries is present.
        """
        with self._lock:
            data = self._read_entries()
        if not data:
            return None
        token = data.get(TOKEN_KEY)
        raw_user = data.get(USER_KEY)
        if not token and not raw_user:
            return None
        if not isinstance(token, str) or not token or not isinstance(raw_user, str):
            raise CorruptSessionError("Persisted session is missing its token or user entry")
        try:
            user = User.model_validate_json(raw_user)
        except ModelValidationError as exc:
            raise CorruptSessionError("Persisted user entry is malformed") from exc
        return StoredSession(token=token, user=user)

    def token(self) -> str | None:
        try:
            with self._lock:
                data = self._read_entries()
        except (CorruptSessionError, OSError):
            return None
        if not data:
            return None
        token = data.get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def clear(self) -> None:
        with self._lock:
            path = self._path()
            if path.exists():
                path.unlink()

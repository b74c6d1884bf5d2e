"""Durable key-value store for the client session.

Holds ``accessToken``, ``refreshToken`` and ``user`` in a JSON file so a
session survives between CLI invocations.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from storefront_client.models.auth import Session, User

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"
USER_KEY = "user"

SESSION_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY)


class SessionStore:
    """JSON-file backed string store.

    Every mutation rewrites the file through a temp file and ``os.replace``,
    so a reader sees either the old or the new value of a key, never a torn
    write.
    """

    def __init__(self, path: str | Path = "./data/session.json") -> None:
        self._file = Path(path)

    @property
    def path(self) -> Path:
        return self._file

    # ── persistence ───────────────────────────────────────────────────

    def _load(self) -> dict[str, str]:
        if not self._file.exists():
            return {}
        try:
            with open(self._file) as f:
                data = json.load(f)
        except (ValueError, OSError):
            logger.warning(f"Ignoring unreadable session file {self._file}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring session file {self._file}: not a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _save(self, data: dict[str, str]) -> None:
        self._file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._file.parent, prefix=".session-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self._file)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    # ── key-value access ──────────────────────────────────────────────

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, *keys: str) -> None:
        data = self._load()
        if not any(k in data for k in keys):
            return
        for key in keys:
            data.pop(key, None)
        self._save(data)

    def keys(self) -> list[str]:
        return sorted(self._load().keys())

    # ── session helpers ───────────────────────────────────────────────

    @property
    def access_token(self) -> str | None:
        return self.get(ACCESS_TOKEN_KEY)

    @property
    def refresh_token(self) -> str | None:
        return self.get(REFRESH_TOKEN_KEY)

    def load_user(self) -> User | None:
        """Decode the stored user, or None when absent or unreadable."""
        raw = self.get(USER_KEY)
        if not raw:
            return None
        try:
            return User.model_validate_json(raw)
        except ValueError:
            logger.warning("Stored user record is not valid JSON; ignoring it")
            return None

    def load_session(self) -> Session:
        """Restore whatever session state is on disk."""
        data = self._load()
        return Session(
            access_token=data.get(ACCESS_TOKEN_KEY),
            refresh_token=data.get(REFRESH_TOKEN_KEY),
            user=self.load_user(),
        )

    def write_session(self, access_token: str, refresh_token: str, user: dict[str, Any] | None) -> None:
        data = self._load()
        data[ACCESS_TOKEN_KEY] = access_token
        data[REFRESH_TOKEN_KEY] = refresh_token
        if user is not None:
            data[USER_KEY] = json.dumps(user)
        else:
            data.pop(USER_KEY, None)
        self._save(data)

    def clear_session(self) -> None:
        self.remove(*SESSION_KEYS)

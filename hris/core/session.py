"""
Explicit authentication state for one signed-in user.

A :class:`Session` is created once and handed to the API client; nothing
in this package keeps tokens in module globals. When ``TOKEN_FILE`` is
configured the access token survives process restarts.
"""

from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path

from hris.core.config import settings
from hris.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)


def _now() -> int:
    return int(time.time())


class Session:
    def __init__(
        self,
        token_file: str | Path | None = None,
        leeway_seconds: int | None = None,
    ) -> None:
        self.access_token: str | None = None
        self.access_token_expires_at: int | None = None
        self.refresh_token: str | None = None
        self.user: CurrentUser | None = None
        self.leeway_seconds = (
            settings.TOKEN_EXPIRY_LEEWAY_SECONDS if leeway_seconds is None else leeway_seconds
        )
        self._token_file = Path(token_file) if token_file else None

    @classmethod
    def from_settings(cls) -> Session:
        session = cls(token_file=settings.TOKEN_FILE)
        session.load()
        return session

    # ── Tokens ──────────────────────────────────────────────────────
    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def set_access_token(self, token: str, expires_in: int) -> None:
        """Store *token*, converting its lifetime (seconds) to an epoch deadline."""
        self.access_token = token
        self.access_token_expires_at = _now() + int(expires_in)
        self.save()

    def set_refresh_token(self, token: str | None) -> None:
        self.refresh_token = token

    def is_access_token_expired(self, now: int | None = None) -> bool:
        """True when no token is held or it expires within the leeway window."""
        if not self.access_token or not self.access_token_expires_at:
            return True
        current = _now() if now is None else now
        return current >= self.access_token_expires_at - self.leeway_seconds

    def auth_headers(self) -> dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}

    def clear(self) -> None:
        self.access_token = None
        self.access_token_expires_at = None
        self.refresh_token = None
        self.user = None
        if self._token_file and self._token_file.exists():
            self._token_file.unlink()
            logger.debug("Removed token file %s", self._token_file)

    # ── Persistence ─────────────────────────────────────────────────
    def save(self) -> None:
        if not self._token_file:
            return
        payload = {
            "access_token": self.access_token,
            "access_token_expires_at": self.access_token_expires_at,
        }
        self._token_file.parent.mkdir(parents=True, exist_ok=True)
        # owner-only: the file holds a bearer token
        fd = os.open(self._token_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(json.dumps(payload))
        os.chmod(self._token_file, 0o600)

    def load(self) -> None:
        if not self._token_file or not self._token_file.is_file():
            return
        try:
            payload = json.loads(self._token_file.read_text(encoding="utf-8"))
            if not isinstance(payload, dict):
                raise ValueError(f"expected an object, got {type(payload).__name__}")
            token = payload.get("access_token")
            expires_at = payload.get("access_token_expires_at")
            expires_at = int(expires_at) if expires_at else None
            if token is not None and not isinstance(token, str):
                raise ValueError("access_token is not a string")
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Ignoring unreadable token file %s: %s", self._token_file, exc)
            return
        self.access_token = token
        self.access_token_expires_at = expires_at

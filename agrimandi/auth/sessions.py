import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Dict, Optional

from agrimandi.schemas.user import SessionUser


@dataclass
class SessionBinding:
    user: SessionUser
    expires_at: datetime


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    """
    Process-held session table keyed by opaque token.

    Bindings are created at login and destroyed at logout or on first
    access after expiry. Nothing here is persisted.
    """

    def __init__(self, ttl: timedelta):
        self.ttl = ttl
        self._lock = Lock()
        self._bindings: Dict[str, SessionBinding] = {}

    def create(self, user: SessionUser) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._bindings[token] = SessionBinding(user=user, expires_at=_now() + self.ttl)
        return token

    def get(self, token: Optional[str]) -> Optional[SessionUser]:
        if not token:
            return None
        with self._lock:
            binding = self._bindings.get(token)
            if binding is None:
                return None
            if binding.expires_at <= _now():
                del self._bindings[token]
                return None
            return binding.user

    def destroy(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            return self._bindings.pop(token, None) is not None

    def purge_expired(self) -> int:
        now = _now()
        with self._lock:
            expired = [t for t, b in self._bindings.items() if b.expires_at <= now]
            for token in expired:
                del self._bindings[token]
        return len(expired)

    def __len__(self):
        with self._lock:
            return len(self._bindings)

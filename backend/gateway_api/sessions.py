"""Session authorities: the stores able to invalidate a session by token."""
from __future__ import annotations

import logging
import threading
from typing import Any, Protocol

import redis

from .config import Settings

logger = logging.getLogger(__name__)


class SessionAuthority(Protocol):
    def invalidate(self, token: str | None) -> bool:
        """Destroy the session for ``token``; False if there was none."""
        ...

    def is_active(self, token: str | None) -> bool:
        ...


class InMemorySessionAuthority:
    """Process-local session store. Safe for concurrent requests."""

    def __init__(self) -> None:
        self._sessions: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def register(self, token: str, **attributes: Any) -> None:
        if not token:
            raise ValueError("Session token must not be empty")
        with self._lock:
            self._sessions[token] = dict(attributes)

    def is_active(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            return token in self._sessions

    def invalidate(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None


class RedisSessionAuthority:
    """Sessions stored as Redis hashes under ``<key_prefix><token>``."""

    def __init__(self, client: redis.Redis, *, key_prefix: str = "gateway:session:"):
        self._client = client
        self._key_prefix = key_prefix

    def _key(self, token: str) -> str:
        return f"{self._key_prefix}{token}"

    def register(self, token: str, **attributes: Any) -> None:
        if not token:
            raise ValueError("Session token must not be empty")
        mapping = {name: str(value) for name, value in attributes.items()} or {"active": "1"}
        self._client.hset(self._key(token), mapping=mapping)

    def is_active(self, token: str | None) -> bool:
        if not token:
            return False
        return int(self._client.exists(self._key(token))) > 0

    def invalidate(self, token: str | None) -> bool:
        if not token:
            return False
        return int(self._client.delete(self._key(token))) > 0


def build_session_authority(settings: Settings) -> InMemorySessionAuthority | RedisSessionAuthority:
    backend = settings.SESSION_BACKEND.strip().lower()
    logger.info("session backend=%s", backend)
    if backend == "memory":
        return InMemorySessionAuthority()
    if backend == "redis":
        client = redis.from_url(settings.REDIS_URL, decode_responses=True)
        return RedisSessionAuthority(client, key_prefix=settings.SESSION_KEY_PREFIX)
    raise ValueError(f"Unknown SESSION_BACKEND: {settings.SESSION_BACKEND!r}")

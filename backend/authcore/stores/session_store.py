"""
TTL key/value session storage for lockout markers and refresh-token records.

Key patterns:
- ``login_lock:{email}``: lockout marker, TTL = lockout duration
- ``refresh_token:{fingerprint}``: refresh record -> user ID, TTL = refresh lifetime
"""
import time
from datetime import timedelta
from typing import Callable, Optional, Protocol

from redis.asyncio import Redis

LOCKOUT_KEY_PREFIX = "login_lock:"
REFRESH_TOKEN_KEY_PREFIX = "refresh_token:"


def lockout_key(email: str) -> str:
    return f"{LOCKOUT_KEY_PREFIX}{email}"


def refresh_token_key(token_fingerprint: str) -> str:
    return f"{REFRESH_TOKEN_KEY_PREFIX}{token_fingerprint}"


class SessionStore(Protocol):
    """
    Key/value store with per-key expiry.

    Each operation is atomic on its own; sequences of operations are not.
    Deleting an absent key is not an error.
    """

    async def set(self, key: str, value: str, ttl: timedelta) -> None: ...

    async def get(self, key: str) -> Optional[str]: ...

    async def delete(self, key: str) -> None: ...


class RedisSessionStore:
    """SessionStore backed by Redis; expiry is Redis' own key TTL."""

    def __init__(self, redis: Redis):
        self.redis = redis

    async def set(self, key: str, value: str, ttl: timedelta) -> None:
        await self.redis.set(key, value, ex=ttl)

    async def get(self, key: str) -> Optional[str]:
        value = await self.redis.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)


class MemorySessionStore:
    """
    In-process SessionStore for single-node development and tests.

    Expired keys are dropped lazily on read.

    Args:
        clock: Monotonic time source in seconds, injectable for tests
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}

    async def set(self, key: str, value: str, ttl: timedelta) -> None:
        self._entries[key] = (value, self._clock() + ttl.total_seconds())

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

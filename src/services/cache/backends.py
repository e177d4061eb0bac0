"""Storage backends shared by the transport and page caches."""

from __future__ import annotations

import logging
import re
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

import redis.asyncio as redis

logger = logging.getLogger(__name__)

_REDIS_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")


class CacheBackend(ABC):
    """Key/value store whose entries carry their own freshness deadline."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when missing or expired."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` and replace any existing entry for ``key``."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove ``key``; return True if an entry was removed."""

    @abstractmethod
    async def keys(self, prefix: str = "") -> list[str]:
        """List live keys starting with ``prefix``."""


class MemoryCacheBackend(CacheBackend):
    """Process-local backend; the clock is injectable for tests.

    Expired entries are swept on write at most once per ``sweep_interval``.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = 60.0,
    ) -> None:
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval
        self._entries: dict[str, tuple[str, float]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, deadline = entry
        if self._clock() >= deadline:
            self._entries.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        now = self._clock()
        if now >= self._next_sweep:
            self._sweep(now)
        self._entries[key] = (value, now + ttl_seconds)

    def _sweep(self, now: float) -> None:
        expired = [k for k, (_, deadline) in self._entries.items() if now >= deadline]
        for key in expired:
            del self._entries[key]
        self._next_sweep = now + self._sweep_interval
        if expired:
            logger.debug("Swept %d expired cache entries", len(expired))

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    async def keys(self, prefix: str = "") -> list[str]:
        now = self._clock()
        return [
            key
            for key, (_, deadline) in self._entries.items()
            if key.startswith(prefix) and now < deadline
        ]


class RedisCacheBackend(CacheBackend):
    """Redis backed store; expiry is delegated to Redis ``EX``."""

    def __init__(self, client: redis.Redis, namespace: str) -> None:
        self._client = client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}{key}"

    async def get(self, key: str) -> str | None:
        raw = await self._client.get(self._key(key))
        if raw is None:
            return None
        return raw.decode() if isinstance(raw, bytes) else raw

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._client.set(self._key(key), value, ex=ttl_seconds)

    async def delete(self, key: str) -> bool:
        return bool(await self._client.delete(self._key(key)))

    async def keys(self, prefix: str = "") -> list[str]:
        pattern = _REDIS_GLOB_SPECIALS.sub(r"\\\1", self._key(prefix)) + "*"
        found: list[str] = []
        async for raw in self._client.scan_iter(match=pattern):
            key = raw.decode() if isinstance(raw, bytes) else raw
            found.append(key[len(self._namespace) :])
        return found


def get_redis_client(url: str) -> redis.Redis:
    """Build an asyncio Redis client for the cache backends."""

    logger.info("Using Redis cache backend at %s", url.rsplit("@", 1)[-1])
    return redis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
    )


async def purge_path(backend: CacheBackend, path: str) -> int:
    """Delete the entry for ``path`` and every query variant of it."""

    removed = 0
    for key in await backend.keys(path):
        if key == path or key.startswith(f"{path}?"):
            if await backend.delete(key):
                removed += 1
    return removed

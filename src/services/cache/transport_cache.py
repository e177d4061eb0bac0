"""Transport-level cache applied to every outbound catalog request."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any
from urllib.parse import urlencode

from src.services.cache.backends import CacheBackend, purge_path

logger = logging.getLogger(__name__)

DEFAULT_TRANSPORT_TTL_SECONDS = 900

# Authentication parameters never take part in a cache key.
_EXCLUDED_PARAMS = frozenset({"consumer_key", "consumer_secret"})


def build_request_key(path: str, params: Mapping[str, Any] | None = None) -> str:
    """Return ``path`` plus its query parameters in a stable order."""

    normalized = sorted(
        (name, str(value))
        for name, value in (params or {}).items()
        if value is not None and name not in _EXCLUDED_PARAMS
    )
    if not normalized:
        return path
    return f"{path}?{urlencode(normalized)}"


class TransportCache:
    """Freshness window wrapped around each remote API call.

    Identical requests (same path and parameters) inside the window are served
    from the stored copy. Concurrent misses for the same key may both fetch.
    """

    def __init__(
        self,
        backend: CacheBackend,
        ttl_seconds: int = DEFAULT_TRANSPORT_TTL_SECONDS,
    ) -> None:
        self._backend = backend
        self.ttl_seconds = ttl_seconds

    async def get_or_fetch(
        self,
        path: str,
        params: Mapping[str, Any] | None,
        fetch: Callable[[], Awaitable[Any]],
    ) -> Any:
        key = build_request_key(path, params)
        cached = await self._backend.get(key)
        if cached is not None:
            logger.debug("Transport cache hit for %s", key)
            return json.loads(cached)

        logger.debug("Transport cache miss for %s", key)
        payload = await fetch()
        await self._backend.set(key, json.dumps(payload), self.ttl_seconds)
        return payload

    async def purge(self, path: str) -> int:
        """Forget stored responses for ``path`` and all of its query variants."""

        removed = await purge_path(self._backend, path)
        logger.info("Purged %d cached response(s) for %s", removed, path)
        return removed

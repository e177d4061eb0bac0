"""Page-level cache holding fully rendered views per page type."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from enum import Enum
from typing import Any

from src.config import Settings
from src.services.cache.backends import CacheBackend, purge_path
from src.services.cache.transport_cache import build_request_key

logger = logging.getLogger(__name__)


class PageType(str, Enum):
    HOME = "home"
    CATEGORY = "category"
    PRODUCT = "product"
    SEARCH = "search"


DEFAULT_PAGE_TTLS: dict[PageType, int] = {
    PageType.HOME: 7200,
    PageType.CATEGORY: 3600,
    PageType.PRODUCT: 1800,
    PageType.SEARCH: 900,
}


def home_path() -> str:
    return "/"


def category_path(slug: str) -> str:
    return f"/category/{slug}"


def product_path(slug: str) -> str:
    return f"/product/{slug}"


def search_path() -> str:
    return "/search"


class PageCache:
    """Stores rendered views keyed by page path and query.

    This tier is independent of the transport cache underneath it: a page hit
    may serve data older than the transport window until its own window
    expires.
    """

    def __init__(
        self,
        backend: CacheBackend,
        ttls: Mapping[PageType, int] | None = None,
    ) -> None:
        self._backend = backend
        self._ttls = {**DEFAULT_PAGE_TTLS, **(ttls or {})}

    @classmethod
    def from_settings(cls, backend: CacheBackend, settings: Settings) -> PageCache:
        return cls(
            backend,
            {
                PageType.HOME: settings.HOME_PAGE_TTL_SECONDS,
                PageType.CATEGORY: settings.CATEGORY_PAGE_TTL_SECONDS,
                PageType.PRODUCT: settings.PRODUCT_PAGE_TTL_SECONDS,
                PageType.SEARCH: settings.SEARCH_PAGE_TTL_SECONDS,
            },
        )

    def ttl_for(self, page_type: PageType) -> int:
        return self._ttls[page_type]

    async def get_or_render(
        self,
        page_type: PageType,
        path: str,
        query: Mapping[str, Any] | None,
        render: Callable[[], Awaitable[dict[str, Any]]],
    ) -> tuple[dict[str, Any], bool]:
        """Return ``(view, hit)``; views are only stored when rendering succeeds."""

        key = build_request_key(path, query)
        cached = await self._backend.get(key)
        if cached is not None:
            logger.debug("Page cache hit for %s", key)
            return json.loads(cached), True

        view = await render()
        await self._backend.set(key, json.dumps(view), self.ttl_for(page_type))
        logger.debug("Rendered and cached %s page %s", page_type.value, key)
        return view, False

    async def purge(self, path: str) -> int:
        """Drop the entry for ``path`` and every query variant of it."""

        removed = await purge_path(self._backend, path)
        logger.info("Purged %d cached page(s) for %s", removed, path)
        return removed

    async def cached_paths(self) -> list[str]:
        return sorted(await self._backend.keys())

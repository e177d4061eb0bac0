"""Catalog client abstractions and the WooCommerce REST implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import httpx

from src.config import Settings
from src.errors import ConfigurationError, RemoteError
from src.models.category import Category, CategoryQuery
from src.models.product import Product, ProductQuery
from src.services.cache.transport_cache import TransportCache

logger = logging.getLogger(__name__)

API_PREFIX = "/wp-json/wc/v3"


class CatalogClient(ABC):
    """Read-only access to the remote product catalog."""

    @abstractmethod
    async def list_products(self, query: ProductQuery | None = None) -> list[Product]:
        """Return published products matching ``query``."""

    @abstractmethod
    async def get_product_by_slug(self, slug: str) -> Product | None:
        """Return the first product with ``slug``, if any."""

    @abstractmethod
    async def get_product_by_id(self, product_id: int) -> Product | None:
        """Return the product with ``product_id``, or None when not found."""

    @abstractmethod
    async def list_categories(
        self, query: CategoryQuery | None = None
    ) -> list[Category]:
        """Return categories ordered by name."""

    @abstractmethod
    async def get_category_by_slug(self, slug: str) -> Category | None:
        """Return the first category with ``slug``, if any."""

    async def get_products_by_category(
        self,
        category_slug: str,
        query: ProductQuery | None = None,
    ) -> list[Product]:
        """Return products of the category, or ``[]`` when it does not resolve."""

        category = await self.get_category_by_slug(category_slug)
        if category is None:
            logger.info("Category %s not found, returning no products", category_slug)
            return []

        query = query or ProductQuery()
        return await self.list_products(
            query.model_copy(update={"category": category.id})
        )

    async def aclose(self) -> None:
        """Release transport resources held by the client."""


class WooCommerceClient(CatalogClient):
    """Client for the WooCommerce REST API.

    Credentials travel as ``consumer_key``/``consumer_secret`` query
    parameters and are kept out of headers, cache keys and log lines.
    Every call goes through the transport cache.
    """

    def __init__(
        self,
        base_url: str,
        consumer_key: str,
        consumer_secret: str,
        *,
        cache: TransportCache,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        if not base_url or not consumer_key or not consumer_secret:
            raise ConfigurationError(
                "WooCommerce environment variables not configured"
            )

        self._base_url = base_url.rstrip("/")
        self._credentials = {
            "consumer_key": consumer_key,
            "consumer_secret": consumer_secret,
        }
        self._cache = cache
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        cache: TransportCache,
        http_client: httpx.AsyncClient | None = None,
    ) -> WooCommerceClient:
        return cls(
            settings.WOOCOMMERCE_BASE_URL,
            settings.WOOCOMMERCE_CONSUMER_KEY,
            settings.WOOCOMMERCE_CONSUMER_SECRET,
            cache=cache,
            http_client=http_client,
            timeout=settings.WOOCOMMERCE_TIMEOUT_SECONDS,
        )

    async def _request(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        query = {k: v for k, v in (params or {}).items() if v is not None}

        async def fetch() -> Any:
            response = await self._http.get(
                f"{self._base_url}{API_PREFIX}/{endpoint}",
                params={**query, **self._credentials},
            )
            if not response.is_success:
                logger.warning(
                    "WooCommerce request to %s failed: %s %s",
                    endpoint,
                    response.status_code,
                    response.reason_phrase,
                )
                raise RemoteError(
                    response.status_code, response.reason_phrase, endpoint
                )
            return response.json()

        return await self._cache.get_or_fetch(f"/{endpoint}", query, fetch)

    async def list_products(self, query: ProductQuery | None = None) -> list[Product]:
        query = query or ProductQuery()
        payload = await self._request("products", query.to_params())
        return [Product.model_validate(item) for item in payload]

    async def get_product_by_slug(self, slug: str) -> Product | None:
        payload = await self._request("products", {"slug": slug, "status": "publish"})
        # Slugs are not guaranteed unique; the first match wins.
        return Product.model_validate(payload[0]) if payload else None

    async def get_product_by_id(self, product_id: int) -> Product | None:
        try:
            payload = await self._request(f"products/{product_id}")
        except RemoteError as exc:
            if exc.is_not_found:
                return None
            raise
        return Product.model_validate(payload)

    async def list_categories(
        self, query: CategoryQuery | None = None
    ) -> list[Category]:
        query = query or CategoryQuery()
        payload = await self._request("products/categories", query.to_params())
        return [Category.model_validate(item) for item in payload]

    async def get_category_by_slug(self, slug: str) -> Category | None:
        payload = await self._request("products/categories", {"slug": slug})
        return Category.model_validate(payload[0]) if payload else None

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

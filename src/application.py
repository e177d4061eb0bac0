"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes import include_api_routes
from src.config import Settings
from src.config import settings as default_settings
from src.errors import ConfigurationError, RemoteError
from src.services.cache.backends import (
    CacheBackend,
    MemoryCacheBackend,
    RedisCacheBackend,
    get_redis_client,
)
from src.services.cache.page_cache import PageCache
from src.services.cache.transport_cache import TransportCache
from src.services.clients.catalog_client import CatalogClient, WooCommerceClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events."""
    if app.state.catalog_client is None:
        logger.warning("Catalog client unavailable; page routes will return 500")

    yield

    if app.state.catalog_client is not None:
        await app.state.catalog_client.aclose()
    if app.state.redis_client is not None:
        await app.state.redis_client.aclose()


def create_app(
    settings: Settings | None = None,
    *,
    catalog_client: CatalogClient | None = None,
    page_cache: PageCache | None = None,
    transport_cache: TransportCache | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Components passed in explicitly are used as-is; anything missing is built
    from ``settings``. An injected catalog client should share the injected
    transport cache so revalidation can purge what it reads.
    """

    settings = settings or default_settings
    app = FastAPI(
        title="Storefront",
        description="Catalog storefront backed by the WooCommerce REST API",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_components(app, settings, catalog_client, page_cache, transport_cache)
    _configure_cors(app, settings)
    _register_exception_handlers(app)
    include_api_routes(app)

    return app


def _configure_components(
    app: FastAPI,
    settings: Settings,
    catalog_client: CatalogClient | None,
    page_cache: PageCache | None,
    transport_cache: TransportCache | None,
) -> None:
    app.state.settings = settings
    app.state.redis_client = (
        get_redis_client(settings.REDIS_URL) if settings.uses_redis_cache else None
    )

    def backend(namespace: str) -> CacheBackend:
        if app.state.redis_client is not None:
            return RedisCacheBackend(app.state.redis_client, namespace)
        return MemoryCacheBackend()

    if page_cache is None:
        page_cache = PageCache.from_settings(backend("page:"), settings)
    app.state.page_cache = page_cache

    if transport_cache is None:
        transport_cache = TransportCache(
            backend("transport:"),
            settings.TRANSPORT_CACHE_TTL_SECONDS,
        )
    app.state.transport_cache = transport_cache

    if catalog_client is None:
        try:
            catalog_client = WooCommerceClient.from_settings(
                settings, cache=transport_cache
            )
        except ConfigurationError as exc:
            logger.error("Catalog client not configured: %s", exc)
    app.state.catalog_client = catalog_client


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _register_exception_handlers(app: FastAPI) -> None:
    """Map catalog failures onto HTTP responses without leaking detail."""

    @app.exception_handler(ConfigurationError)
    async def _configuration_error(
        request: Request, exc: ConfigurationError
    ) -> JSONResponse:
        logger.error("Configuration error serving %s: %s", request.url.path, exc)
        return JSONResponse({"error": "Configuration error"}, status_code=500)

    @app.exception_handler(RemoteError)
    async def _remote_error(request: Request, exc: RemoteError) -> JSONResponse:
        logger.error(
            "Catalog error serving %s: %s %s",
            request.url.path,
            exc.status_code,
            exc.reason,
        )
        return JSONResponse({"error": "Upstream catalog error"}, status_code=502)

    @app.exception_handler(httpx.TransportError)
    async def _transport_error(
        request: Request, exc: httpx.TransportError
    ) -> JSONResponse:
        logger.error("Catalog unreachable serving %s: %s", request.url.path, exc)
        return JSONResponse({"error": "Upstream catalog unavailable"}, status_code=502)

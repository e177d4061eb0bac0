"""FastAPI dependencies resolving the components built by the app factory."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from src.config import Settings
from src.errors import ConfigurationError
from src.services.cache.page_cache import PageCache
from src.services.cache.transport_cache import TransportCache
from src.services.clients.catalog_client import CatalogClient
from src.services.pages import PageRenderer
from src.services.revalidation import RevalidationService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog_client(request: Request) -> CatalogClient:
    """Return the catalog client, failing when it could not be configured."""

    client = request.app.state.catalog_client
    if client is None:
        raise ConfigurationError("WooCommerce environment variables not configured")
    return client


def get_page_cache(request: Request) -> PageCache:
    return request.app.state.page_cache


def get_transport_cache(request: Request) -> TransportCache:
    return request.app.state.transport_cache


SettingsDependency = Annotated[Settings, Depends(get_settings)]
CatalogClientDependency = Annotated[CatalogClient, Depends(get_catalog_client)]
PageCacheDependency = Annotated[PageCache, Depends(get_page_cache)]
TransportCacheDependency = Annotated[TransportCache, Depends(get_transport_cache)]


def get_page_renderer(
    client: CatalogClientDependency,
    settings: SettingsDependency,
) -> PageRenderer:
    return PageRenderer(client, settings)


def get_revalidation_service(
    page_cache: PageCacheDependency,
    transport_cache: TransportCacheDependency,
) -> RevalidationService:
    return RevalidationService(page_cache, transport_cache)


PageRendererDependency = Annotated[PageRenderer, Depends(get_page_renderer)]
RevalidationDependency = Annotated[
    RevalidationService, Depends(get_revalidation_service)
]

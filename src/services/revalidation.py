"""On-demand revalidation of cached pages after catalog changes."""

from __future__ import annotations

import logging
import secrets

from src.errors import AuthorizationError, ConfigurationError
from src.models.revalidation import EntityType, RevalidationRequest, RevalidationResult
from src.services.cache.page_cache import (
    PageCache,
    category_path,
    home_path,
    product_path,
    search_path,
)
from src.services.cache.transport_cache import TransportCache

logger = logging.getLogger(__name__)

# Transport entries behind the storefront views, keyed by remote endpoint.
PRODUCTS_ENDPOINT = "/products"
CATEGORIES_ENDPOINT = "/products/categories"


def verify_bearer_secret(authorization: str | None, expected: str | None) -> None:
    """Check an ``Authorization: Bearer <secret>`` header against ``expected``."""

    if not expected:
        logger.error("REVALIDATE_SECRET not configured")
        raise ConfigurationError("REVALIDATE_SECRET not configured")

    if not authorization or not secrets.compare_digest(
        authorization.encode(), f"Bearer {expected}".encode()
    ):
        logger.warning("Invalid revalidation secret")
        raise AuthorizationError()


class RevalidationService:
    """Maps a change notification onto the cached data it affects.

    Page entries are purged so the next request renders again, and the
    transport entries those pages read from are purged so that render goes
    back to the remote catalog.
    """

    def __init__(
        self,
        page_cache: PageCache,
        transport_cache: TransportCache | None = None,
    ) -> None:
        self._page_cache = page_cache
        self._transport_cache = transport_cache

    @staticmethod
    def affected_paths(request: RevalidationRequest) -> list[str]:
        entity = EntityType.parse(request.type)
        paths: list[str] = []

        if entity is EntityType.PRODUCT:
            if request.slug:
                paths.append(product_path(request.slug))
            # Listings may show this product.
            paths.extend([home_path(), search_path()])
        elif entity in (EntityType.CATEGORY, EntityType.PRODUCT_CATEGORY):
            if request.slug:
                paths.append(category_path(request.slug))
            paths.append(home_path())
        else:
            logger.info("Unknown revalidation type: %s", request.type)
            paths.append(home_path())

        return paths

    @staticmethod
    def affected_endpoints(request: RevalidationRequest) -> list[str]:
        """Remote endpoints whose stored responses back the affected pages."""

        entity = EntityType.parse(request.type)
        if entity is EntityType.PRODUCT:
            endpoints = [PRODUCTS_ENDPOINT]
            if request.id is not None:
                endpoints.append(f"{PRODUCTS_ENDPOINT}/{request.id}")
            return endpoints
        # Category pages and the home page read both categories and listings.
        return [CATEGORIES_ENDPOINT, PRODUCTS_ENDPOINT]

    async def revalidate(self, request: RevalidationRequest) -> RevalidationResult:
        logger.info(
            "Revalidation request: type=%s slug=%s id=%s",
            request.type,
            request.slug,
            request.id,
        )
        paths = self.affected_paths(request)
        for path in paths:
            await self._page_cache.purge(path)

        endpoints: list[str] = []
        if self._transport_cache is not None:
            endpoints = self.affected_endpoints(request)
            for endpoint in endpoints:
                await self._transport_cache.purge(endpoint)

        return RevalidationResult(
            type=request.type_label,
            slug=request.slug,
            purged=paths,
            refetched=endpoints,
        )

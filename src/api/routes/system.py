"""System-level routes such as health checks."""

from __future__ import annotations

from fastapi import APIRouter, Request

from src.api.dependencies import PageCacheDependency, SettingsDependency

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(
    request: Request,
    settings: SettingsDependency,
    page_cache: PageCacheDependency,
) -> dict[str, str | int | bool]:
    """Health check reporting catalog configuration and cache usage."""

    return {
        "status": "healthy",
        "catalog_configured": request.app.state.catalog_client is not None,
        "cache_backend": settings.CACHE_BACKEND,
        "cached_pages": len(await page_cache.cached_paths()),
        "environment": settings.ENVIRONMENT,
    }

"""Storefront page routes served through the page-level cache."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse

from src.api.dependencies import PageCacheDependency, PageRendererDependency
from src.models.product import ProductQuery, SortDirection, SortKey
from src.services.cache.page_cache import (
    PageType,
    category_path,
    home_path,
    product_path,
    search_path,
)

router = APIRouter(tags=["pages"])


def _page_response(view: dict[str, Any], hit: bool, ttl: int) -> JSONResponse:
    return JSONResponse(
        view,
        headers={
            "Cache-Control": f"public, s-maxage={ttl}, stale-while-revalidate",
            "X-Page-Cache": "hit" if hit else "miss",
        },
    )


@router.get("/", summary="Home page with top categories and latest products")
async def home_page(
    renderer: PageRendererDependency,
    page_cache: PageCacheDependency,
) -> JSONResponse:
    view, hit = await page_cache.get_or_render(
        PageType.HOME, home_path(), None, renderer.render_home
    )
    return _page_response(view, hit, page_cache.ttl_for(PageType.HOME))


@router.get("/category/{slug}", summary="Category page with its products")
async def category_page(
    slug: str,
    renderer: PageRendererDependency,
    page_cache: PageCacheDependency,
    page: int = Query(1, ge=1),
) -> JSONResponse:
    async def render() -> dict[str, Any]:
        view = await renderer.render_category(slug, page)
        if view is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Category not found")
        return view

    view, hit = await page_cache.get_or_render(
        PageType.CATEGORY, category_path(slug), {"page": page}, render
    )
    return _page_response(view, hit, page_cache.ttl_for(PageType.CATEGORY))


@router.get("/product/{slug}", summary="Product detail page")
async def product_page(
    slug: str,
    renderer: PageRendererDependency,
    page_cache: PageCacheDependency,
) -> JSONResponse:
    async def render() -> dict[str, Any]:
        view = await renderer.render_product(slug)
        if view is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Product not found")
        return view

    view, hit = await page_cache.get_or_render(
        PageType.PRODUCT, product_path(slug), None, render
    )
    return _page_response(view, hit, page_cache.ttl_for(PageType.PRODUCT))


@router.get("/search", summary="Product search and listing page")
async def search_page(
    renderer: PageRendererDependency,
    page_cache: PageCacheDependency,
    q: str | None = None,
    category: int | None = None,
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    orderby: SortKey | None = None,
    order: SortDirection | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
) -> JSONResponse:
    query = ProductQuery(
        search=q,
        category=category,
        min_price=min_price,
        max_price=max_price,
        orderby=orderby,
        order=order,
        page=page,
        per_page=per_page,
    )

    async def render() -> dict[str, Any]:
        return await renderer.render_search(query)

    view, hit = await page_cache.get_or_render(
        PageType.SEARCH,
        search_path(),
        query.model_dump(exclude_none=True),
        render,
    )
    return _page_response(view, hit, page_cache.ttl_for(PageType.SEARCH))

"""Page renderers turning catalog data into view models."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from src.config import Settings
from src.models.category import CategoryQuery
from src.models.pages import (
    Breadcrumb,
    CategoryView,
    HomeView,
    OrderContact,
    PageMeta,
    ProductDetail,
    ProductSummary,
    ProductView,
    SearchView,
)
from src.models.product import Product, ProductQuery
from src.services.attributes import product_specs
from src.services.cache.page_cache import category_path, product_path
from src.services.clients.catalog_client import CatalogClient
from src.services.formatting import format_price, strip_html, truncate_text

logger = logging.getLogger(__name__)

HOME_CATEGORY_LIMIT = 8
HOME_LATEST_LIMIT = 8
CATEGORY_PAGE_SIZE = 20
EXCERPT_LENGTH = 120


def summarize_product(product: Product) -> ProductSummary:
    return ProductSummary(
        id=product.id,
        name=product.name,
        slug=product.slug,
        href=product_path(product.slug),
        price=product.display_price,
        formatted_price=format_price(product.display_price),
        regular_price=product.regular_price,
        on_sale=product.on_sale,
        stock_status=product.stock_status,
        image=product.images[0] if product.images else None,
        excerpt=truncate_text(strip_html(product.short_description), EXCERPT_LENGTH),
    )


class PageRenderer:
    """Builds the storefront views.

    Independent fetches for one page run concurrently; if any of them fails
    the whole render fails.
    """

    def __init__(self, client: CatalogClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    def _title(self, name: str) -> str:
        return f"{name} - {self._settings.SITE_NAME}"

    def _url(self, path: str) -> str:
        return f"{self._settings.SITE_URL.rstrip('/')}{path}"

    async def render_home(self) -> dict[str, Any]:
        categories, latest = await asyncio.gather(
            self._client.list_categories(
                CategoryQuery(parent=0, per_page=HOME_CATEGORY_LIMIT)
            ),
            self._client.list_products(
                ProductQuery(per_page=HOME_LATEST_LIMIT, orderby="date", order="desc")
            ),
        )
        view = HomeView(
            meta=PageMeta(
                title=self._settings.SITE_NAME,
                canonical_url=self._url("/"),
            ),
            categories=categories,
            latest_products=[summarize_product(p) for p in latest],
        )
        return view.model_dump(mode="json")

    async def render_category(
        self, slug: str, page: int = 1
    ) -> dict[str, Any] | None:
        category, products = await asyncio.gather(
            self._client.get_category_by_slug(slug),
            self._client.get_products_by_category(
                slug,
                ProductQuery(
                    page=page,
                    per_page=CATEGORY_PAGE_SIZE,
                    orderby="date",
                    order="desc",
                ),
            ),
        )
        if category is None:
            logger.info("Category page requested for unknown slug %s", slug)
            return None

        description = strip_html(category.description) or (
            f"Browse our {category.name} collection"
        )
        view = CategoryView(
            meta=PageMeta(
                title=self._title(category.name),
                description=description,
                images=[category.image.src] if category.image else [],
                canonical_url=self._url(category_path(slug)),
            ),
            breadcrumbs=[
                Breadcrumb(label="Home", href="/"),
                Breadcrumb(label=category.name),
            ],
            category=category,
            products=[summarize_product(p) for p in products],
            page=page,
            per_page=CATEGORY_PAGE_SIZE,
            has_next_page=len(products) == CATEGORY_PAGE_SIZE,
        )
        return view.model_dump(mode="json")

    async def render_product(self, slug: str) -> dict[str, Any] | None:
        product = await self._client.get_product_by_slug(slug)
        if product is None:
            logger.info("Product page requested for unknown slug %s", slug)
            return None

        summary = summarize_product(product)
        detail = ProductDetail(
            **summary.model_dump(),
            sku=product.sku,
            description=product.description,
            short_description=product.short_description,
            images=product.images,
            categories=product.categories,
            specs=product_specs(product),
        )

        breadcrumbs = [Breadcrumb(label="Home", href="/")]
        if product.categories:
            first = product.categories[0]
            breadcrumbs.append(
                Breadcrumb(label=first.name, href=category_path(first.slug))
            )
        breadcrumbs.append(Breadcrumb(label=product.name))

        product_url = self._url(product_path(product.slug))
        view = ProductView(
            meta=PageMeta(
                title=self._title(product.name),
                description=strip_html(
                    product.short_description or product.description
                ),
                images=[product.images[0].src] if product.images else [],
                canonical_url=product_url,
            ),
            breadcrumbs=breadcrumbs,
            product=detail,
            order_contact=OrderContact(
                phone_number=self._settings.WA_NUMBER,
                product_url=product_url,
            ),
        )
        return view.model_dump(mode="json")

    async def render_search(self, query: ProductQuery) -> dict[str, Any]:
        products = await self._client.list_products(query)
        title = f'Search results for "{query.search}"' if query.search else "Products"
        view = SearchView(
            meta=PageMeta(title=self._title(title)),
            query=query.search,
            products=[summarize_product(p) for p in products],
            page=query.page,
            per_page=query.per_page,
            has_next_page=len(products) == query.per_page,
        )
        return view.model_dump(mode="json")

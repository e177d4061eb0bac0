"""Pytest configuration and fixtures for the storefront service."""

from __future__ import annotations

import copy

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.application import create_app
from src.config import Settings
from src.services.cache.backends import MemoryCacheBackend
from src.services.cache.page_cache import PageCache
from src.services.cache.transport_cache import TransportCache
from src.services.clients.catalog_client import WooCommerceClient

BASE_URL = "https://shop.example.com"
CONSUMER_KEY = "ck_test_key"
CONSUMER_SECRET = "cs_test_secret"
REVALIDATE_SECRET = "test-revalidate-secret"

CATEGORIES = [
    {
        "id": 10,
        "name": "Graphics Cards",
        "slug": "graphics-cards",
        "description": "<p>GPUs for gaming and work</p>",
        "parent": 0,
        "count": 2,
        "image": {"id": 501, "src": f"{BASE_URL}/img/gpu.jpg", "alt": "GPU"},
    },
    {
        "id": 11,
        "name": "Storage",
        "slug": "storage",
        "description": "",
        "parent": 0,
        "count": 1,
        "image": None,
    },
    {
        "id": 12,
        "name": "NVMe Drives",
        "slug": "nvme",
        "description": "",
        "parent": 11,
        "count": 1,
    },
]

PRODUCTS = [
    {
        "id": 101,
        "name": "GPU X 8GB",
        "slug": "gpu-x",
        "permalink": f"{BASE_URL}/product/gpu-x",
        "price": "95000",
        "regular_price": "105000",
        "sale_price": "95000",
        "description": "<p>Fast graphics card.</p>",
        "short_description": "<p>8GB GDDR6 <b>graphics</b> card</p>",
        "sku": "GPU-X-8",
        "stock_status": "instock",
        "images": [
            {"id": 1, "src": f"{BASE_URL}/img/gpu-x-front.jpg", "alt": "Front"},
            {"id": 2, "src": f"{BASE_URL}/img/gpu-x-back.jpg", "alt": "Back"},
        ],
        "categories": [{"id": 10, "name": "Graphics Cards", "slug": "graphics-cards"}],
        "brands": [{"id": 7, "name": "Zotac", "slug": "zotac"}],
        "attributes": [
            {"id": 1, "name": "Brand", "options": ["Zotac"]},
            {"id": 2, "name": "Warranty Period", "options": ["3 Years"]},
            {"id": 3, "name": "Warranty Type", "options": ["Local"]},
        ],
    },
    {
        "id": 102,
        "name": "GPU Y 12GB",
        "slug": "gpu-y",
        "permalink": f"{BASE_URL}/product/gpu-y",
        "price": "150000",
        "regular_price": "150000",
        "sale_price": "",
        "description": "",
        "short_description": "",
        "sku": "",
        "stock_status": "onbackorder",
        "images": [],
        "categories": [{"id": 10, "name": "Graphics Cards", "slug": "graphics-cards"}],
        "attributes": [
            {"id": 4, "name": "Product Condition", "options": ["Used"]},
        ],
    },
    {
        "id": 103,
        "name": "SSD One 1TB",
        "slug": "ssd-1",
        "permalink": f"{BASE_URL}/product/ssd-1",
        "price": "18500",
        "regular_price": "18500",
        "sale_price": "",
        "description": "",
        "short_description": "",
        "sku": "SSD-1TB",
        "stock_status": "outofstock",
        "images": [],
        "categories": [
            {"id": 11, "name": "Storage", "slug": "storage"},
            {"id": 12, "name": "NVMe Drives", "slug": "nvme"},
        ],
        "attributes": [],
    },
]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeWooCommerce:
    """In-process stand-in for the WooCommerce REST API."""

    def __init__(self) -> None:
        self.products = copy.deepcopy(PRODUCTS)
        self.categories = copy.deepcopy(CATEGORIES)
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"code": "error"})

        path = request.url.path.removeprefix("/wp-json/wc/v3/")
        params = request.url.params

        if path == "products/categories":
            items = self.categories
            if "slug" in params:
                items = [c for c in items if c["slug"] == params["slug"]]
            if "parent" in params:
                items = [c for c in items if str(c["parent"]) == params["parent"]]
            return httpx.Response(200, json=items[: int(params.get("per_page", 10))])

        if path == "products":
            items = self.products
            if "slug" in params:
                items = [p for p in items if p["slug"] == params["slug"]]
            if "category" in params:
                items = [
                    p
                    for p in items
                    if any(str(c["id"]) == params["category"] for c in p["categories"])
                ]
            if "search" in params:
                needle = params["search"].lower()
                items = [p for p in items if needle in p["name"].lower()]
            return httpx.Response(200, json=items[: int(params.get("per_page", 10))])

        if path.startswith("products/"):
            product_id = path.split("/", 1)[1]
            for product in self.products:
                if str(product["id"]) == product_id:
                    return httpx.Response(200, json=product)
            return httpx.Response(
                404, json={"code": "woocommerce_rest_product_invalid_id"}
            )

        return httpx.Response(404, json={"code": "rest_no_route"})

    def paths(self) -> list[str]:
        return [r.url.path.removeprefix("/wp-json/wc/v3/") for r in self.requests]


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def remote() -> FakeWooCommerce:
    return FakeWooCommerce()


@pytest.fixture()
def transport_cache(clock) -> TransportCache:
    return TransportCache(MemoryCacheBackend(clock), ttl_seconds=900)


@pytest.fixture()
def page_cache(clock) -> PageCache:
    return PageCache(MemoryCacheBackend(clock))


@pytest_asyncio.fixture()
async def woo_client(remote, transport_cache):
    """WooCommerce client wired to the fake remote through a mock transport."""

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(remote.handler))
    client = WooCommerceClient(
        BASE_URL,
        CONSUMER_KEY,
        CONSUMER_SECRET,
        cache=transport_cache,
        http_client=http_client,
    )
    try:
        yield client
    finally:
        await http_client.aclose()


@pytest.fixture()
def app_settings() -> Settings:
    """Settings isolated from the developer's environment."""

    settings = Settings()
    settings.ENVIRONMENT = "test"
    settings.CACHE_BACKEND = "memory"
    settings.WOOCOMMERCE_BASE_URL = BASE_URL
    settings.WOOCOMMERCE_CONSUMER_KEY = CONSUMER_KEY
    settings.WOOCOMMERCE_CONSUMER_SECRET = CONSUMER_SECRET
    settings.REVALIDATE_SECRET = REVALIDATE_SECRET
    settings.SITE_NAME = "PC Wala Online"
    settings.SITE_URL = BASE_URL
    settings.WA_NUMBER = "+920000000000"
    return settings


@pytest.fixture()
def app(app_settings, woo_client, page_cache, transport_cache):
    return create_app(
        app_settings,
        catalog_client=woo_client,
        page_cache=page_cache,
        transport_cache=transport_cache,
    )


@pytest_asyncio.fixture()
async def client(app):
    """Return an HTTPX async client pointing at the FastAPI app."""

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client


@pytest.fixture()
def auth_header() -> dict[str, str]:
    return {"Authorization": f"Bearer {REVALIDATE_SECRET}"}

"""Tests for the WooCommerce catalog client."""

import httpx
import pytest

from src.errors import ConfigurationError, RemoteError
from src.models.category import CategoryQuery
from src.models.product import ProductQuery, StockStatus
from src.services.cache.backends import MemoryCacheBackend
from src.services.cache.transport_cache import TransportCache
from src.services.clients.catalog_client import WooCommerceClient

BASE_URL = "https://shop.example.com"
CONSUMER_KEY = "ck_test_key"
CONSUMER_SECRET = "cs_test_secret"


@pytest.mark.parametrize(
    ("base_url", "key", "secret"),
    [
        ("", CONSUMER_KEY, CONSUMER_SECRET),
        (BASE_URL, "", CONSUMER_SECRET),
        (BASE_URL, CONSUMER_KEY, ""),
    ],
)
def test_construction_requires_all_connection_values(base_url, key, secret):
    with pytest.raises(ConfigurationError):
        WooCommerceClient(
            base_url,
            key,
            secret,
            cache=TransportCache(MemoryCacheBackend()),
        )


@pytest.mark.asyncio
async def test_credentials_travel_in_query_string_only(woo_client, remote):
    await woo_client.list_products()

    request = remote.requests[0]
    assert request.url.params["consumer_key"] == CONSUMER_KEY
    assert request.url.params["consumer_secret"] == CONSUMER_SECRET
    assert request.url.path == "/wp-json/wc/v3/products"
    assert "authorization" not in request.headers
    assert CONSUMER_SECRET not in "".join(request.headers.values())


@pytest.mark.asyncio
async def test_list_products_defaults(woo_client, remote):
    products = await woo_client.list_products()

    params = remote.requests[0].url.params
    assert params["status"] == "publish"
    assert params["per_page"] == "20"
    assert params["page"] == "1"
    assert "orderby" not in params
    assert [p.slug for p in products] == ["gpu-x", "gpu-y", "ssd-1"]


@pytest.mark.asyncio
async def test_list_products_filters(woo_client, remote):
    await woo_client.list_products(
        ProductQuery(
            search="gpu",
            category=10,
            min_price=1000,
            max_price=200000,
            orderby="price",
            page=2,
            per_page=5,
        )
    )

    params = remote.requests[0].url.params
    assert params["search"] == "gpu"
    assert params["category"] == "10"
    assert params["min_price"] == "1000.0"
    assert params["max_price"] == "200000.0"
    assert params["orderby"] == "price"
    assert params["order"] == "desc"
    assert params["page"] == "2"
    assert params["per_page"] == "5"


@pytest.mark.asyncio
async def test_get_product_by_slug_parses_record(woo_client, remote):
    product = await woo_client.get_product_by_slug("gpu-x")

    assert product is not None
    assert product.id == 101
    assert product.stock_status is StockStatus.IN_STOCK
    assert product.display_price == "95000"
    assert product.on_sale is True
    assert [image.alt for image in product.images] == ["Front", "Back"]
    assert remote.requests[0].url.params["status"] == "publish"


@pytest.mark.asyncio
@pytest.mark.parametrize("slug", ["missing", "gpu", "GPU-X"])
async def test_get_product_by_unknown_slug_returns_none(woo_client, slug):
    assert await woo_client.get_product_by_slug(slug) is None


@pytest.mark.asyncio
async def test_get_product_by_slug_takes_first_match(woo_client, remote):
    duplicate = dict(remote.products[1], slug="gpu-x")
    remote.products.append(duplicate)

    product = await woo_client.get_product_by_slug("gpu-x")

    assert product.id == 101


@pytest.mark.asyncio
async def test_get_product_by_id(woo_client, remote):
    product = await woo_client.get_product_by_id(103)

    assert product.slug == "ssd-1"
    assert product.in_stock is False
    assert remote.paths() == ["products/103"]


@pytest.mark.asyncio
async def test_get_product_by_id_not_found_returns_none(woo_client):
    assert await woo_client.get_product_by_id(999) is None


@pytest.mark.asyncio
async def test_get_product_by_id_propagates_other_remote_errors(woo_client, remote):
    remote.fail_with = 500

    with pytest.raises(RemoteError) as exc_info:
        await woo_client.get_product_by_id(101)

    assert exc_info.value.status_code == 500
    assert exc_info.value.reason == "Internal Server Error"


@pytest.mark.asyncio
async def test_remote_error_carries_status_and_reason(woo_client, remote):
    remote.fail_with = 401

    with pytest.raises(RemoteError) as exc_info:
        await woo_client.list_products()

    assert exc_info.value.status_code == 401
    assert exc_info.value.reason == "Unauthorized"
    assert exc_info.value.endpoint == "products"


@pytest.mark.asyncio
async def test_remote_errors_are_not_retried(woo_client, remote):
    remote.fail_with = 503

    with pytest.raises(RemoteError):
        await woo_client.get_product_by_slug("gpu-x")

    assert len(remote.requests) == 1


@pytest.mark.asyncio
async def test_list_categories_defaults(woo_client, remote):
    categories = await woo_client.list_categories()

    params = remote.requests[0].url.params
    assert params["per_page"] == "100"
    assert params["orderby"] == "name"
    assert params["order"] == "asc"
    assert "parent" not in params
    assert len(categories) == 3


@pytest.mark.asyncio
async def test_list_top_level_categories(woo_client, remote):
    categories = await woo_client.list_categories(CategoryQuery(parent=0, per_page=8))

    assert remote.requests[0].url.params["parent"] == "0"
    assert all(category.is_top_level for category in categories)
    assert [c.slug for c in categories] == ["graphics-cards", "storage"]


@pytest.mark.asyncio
async def test_get_category_by_slug(woo_client):
    category = await woo_client.get_category_by_slug("nvme")

    assert category.id == 12
    assert category.parent == 11
    assert category.image is None
    assert await woo_client.get_category_by_slug("nope") is None


@pytest.mark.asyncio
async def test_get_products_by_category_resolves_id(woo_client, remote):
    products = await woo_client.get_products_by_category(
        "graphics-cards", ProductQuery(per_page=5)
    )

    assert [p.slug for p in products] == ["gpu-x", "gpu-y"]
    assert remote.paths() == ["products/categories", "products"]
    assert remote.requests[1].url.params["category"] == "10"
    assert remote.requests[1].url.params["per_page"] == "5"


@pytest.mark.asyncio
async def test_get_products_by_unknown_category_is_empty(woo_client, remote):
    assert await woo_client.get_products_by_category("no-such-category") == []
    assert remote.paths() == ["products/categories"]


@pytest.mark.asyncio
async def test_transport_failures_propagate(transport_cache):
    def explode(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(explode))
    client = WooCommerceClient(
        BASE_URL,
        CONSUMER_KEY,
        CONSUMER_SECRET,
        cache=transport_cache,
        http_client=http_client,
    )

    with pytest.raises(httpx.ConnectError):
        await client.list_categories()

    await http_client.aclose()

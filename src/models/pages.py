"""View models produced by the page renderers."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.models.category import Category
from src.models.product import ProductImage, StockStatus, TermRef


class PageMeta(BaseModel):
    """Document metadata for a rendered page."""

    title: str
    description: str = ""
    images: list[str] = Field(default_factory=list)
    canonical_url: str | None = None


class Breadcrumb(BaseModel):
    label: str
    href: str | None = None


class ProductSummary(BaseModel):
    """Product card used by listings."""

    id: int
    name: str
    slug: str
    href: str
    price: str
    formatted_price: str
    regular_price: str = ""
    on_sale: bool = False
    stock_status: StockStatus
    image: ProductImage | None = None
    excerpt: str = ""


class ProductDetail(ProductSummary):
    sku: str = ""
    description: str = ""
    short_description: str = ""
    images: list[ProductImage] = Field(default_factory=list)
    categories: list[TermRef] = Field(default_factory=list)
    specs: dict[str, str] = Field(default_factory=dict)


class OrderContact(BaseModel):
    """Where shoppers send click-to-order messages."""

    phone_number: str
    product_url: str


class HomeView(BaseModel):
    meta: PageMeta
    categories: list[Category] = Field(default_factory=list)
    latest_products: list[ProductSummary] = Field(default_factory=list)


class CategoryView(BaseModel):
    meta: PageMeta
    breadcrumbs: list[Breadcrumb] = Field(default_factory=list)
    category: Category
    products: list[ProductSummary] = Field(default_factory=list)
    page: int = 1
    per_page: int = 20
    has_next_page: bool = False


class ProductView(BaseModel):
    meta: PageMeta
    breadcrumbs: list[Breadcrumb] = Field(default_factory=list)
    product: ProductDetail
    order_contact: OrderContact


class SearchView(BaseModel):
    meta: PageMeta
    query: str | None = None
    products: list[ProductSummary] = Field(default_factory=list)
    page: int = 1
    per_page: int = 20
    has_next_page: bool = False

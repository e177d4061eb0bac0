"""Product domain models mirroring the WooCommerce REST payloads."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class StockStatus(str, Enum):
    """Stock states reported by the remote catalog."""

    IN_STOCK = "instock"
    OUT_OF_STOCK = "outofstock"
    ON_BACKORDER = "onbackorder"


class ProductImage(BaseModel):
    """Image attached to a product or category."""

    id: int
    src: str
    alt: str = ""


class TermRef(BaseModel):
    """Reference to a taxonomy term (category or brand) on a product."""

    id: int
    name: str
    slug: str


class ProductAttribute(BaseModel):
    """Named attribute with its ordered option values."""

    id: int = 0
    name: str
    options: list[str] = Field(default_factory=list)


class Product(BaseModel):
    """Product record as returned by the remote catalog."""

    id: int
    name: str
    slug: str
    permalink: str = ""
    price: str = Field("", description="Server computed effective price")
    regular_price: str = ""
    sale_price: str = ""
    description: str = ""
    short_description: str = ""
    sku: str = ""
    stock_status: StockStatus = StockStatus.IN_STOCK
    images: list[ProductImage] = Field(default_factory=list)
    categories: list[TermRef] = Field(default_factory=list)
    brands: list[TermRef] | None = None
    attributes: list[ProductAttribute] = Field(default_factory=list)

    @property
    def on_sale(self) -> bool:
        """True when the sale price is the one shown to shoppers."""
        return bool(self.sale_price) and self.sale_price != self.regular_price

    @property
    def display_price(self) -> str:
        return self.sale_price if self.on_sale else self.price

    @property
    def in_stock(self) -> bool:
        return self.stock_status is StockStatus.IN_STOCK


SortKey = Literal["relevance", "date", "price", "popularity"]
SortDirection = Literal["asc", "desc"]


class ProductQuery(BaseModel):
    """Filters accepted by the product listing endpoint."""

    search: str | None = None
    category: int | None = Field(None, description="Category identifier")
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    orderby: SortKey | None = None
    order: SortDirection | None = None
    page: int = Field(1, ge=1)
    per_page: int = Field(20, ge=1, le=100)

    def to_params(self) -> dict[str, str | int | float]:
        """Build the remote query string, published products only."""

        params: dict[str, str | int | float] = {
            "status": "publish",
            "per_page": self.per_page,
            "page": self.page,
        }
        if self.search:
            params["search"] = self.search
        if self.category is not None:
            params["category"] = self.category
        if self.min_price is not None:
            params["min_price"] = self.min_price
        if self.max_price is not None:
            params["max_price"] = self.max_price
        if self.orderby:
            params["orderby"] = self.orderby
            params["order"] = self.order or "desc"
        return params

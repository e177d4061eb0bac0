"""Category domain models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.models.product import ProductImage


class Category(BaseModel):
    """Product category; categories form a tree through ``parent``."""

    id: int
    name: str
    slug: str
    description: str = ""
    parent: int = Field(0, description="Parent category id, 0 for top level")
    count: int = 0
    image: ProductImage | None = None

    @property
    def is_top_level(self) -> bool:
        return self.parent == 0


class CategoryQuery(BaseModel):
    """Filters accepted by the category listing endpoint."""

    parent: int | None = Field(None, ge=0)
    per_page: int = Field(100, ge=1, le=100)

    def to_params(self) -> dict[str, str | int]:
        params: dict[str, str | int] = {
            "per_page": self.per_page,
            "orderby": "name",
            "order": "asc",
        }
        if self.parent is not None:
            params["parent"] = self.parent
        return params

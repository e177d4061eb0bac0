"""Models for the on-demand revalidation webhook."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class EntityType(str, Enum):
    """Entity types the remote platform reports changes for."""

    PRODUCT = "product"
    CATEGORY = "category"
    PRODUCT_CATEGORY = "product_category"

    @classmethod
    def parse(cls, value: object) -> EntityType | None:
        """Return the matching member, or None for unrecognized values."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


def _scalar_to_str(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int | float):
        return str(value)
    return None


class RevalidationRequest(BaseModel):
    """Webhook body sent when catalog entities change.

    Fields are loosely typed: values that do not fit fall through to the
    conservative home-only handling instead of failing the request.
    """

    type: Any = None
    slug: str | None = None
    id: int | None = None

    @field_validator("slug", mode="before")
    @classmethod
    def _coerce_slug(cls, value: Any) -> str | None:
        return _scalar_to_str(value) or None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> int | None:
        if isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @property
    def type_label(self) -> str | None:
        return None if self.type is None else str(self.type)


class RevalidationResult(BaseModel):
    """Outcome of a dispatched revalidation."""

    type: str | None = None
    slug: str | None = None
    purged: list[str] = Field(default_factory=list)
    refetched: list[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        suffix = f" ({self.slug})" if self.slug else ""
        return f"Revalidated {self.type or 'unknown'}{suffix}"


class RevalidationResponse(BaseModel):
    """Response body returned after a successful revalidation."""

    success: bool = True
    message: str
    timestamp: str
    purged: list[str] = Field(default_factory=list)

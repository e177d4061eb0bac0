"""Typed lookup of well-known product attributes.

Attribute names are free text in the remote catalog ("Brand", "Product
Condition", "Warranty Period" ...). Lookups normalize names to lower case and
match recognized keys by fragment, returning an empty string when nothing
matches.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from src.models.product import Product, ProductAttribute


class AttributeKey(Enum):
    """Recognized attribute keys and the name fragments tried, in order."""

    BRAND = ("brand",)
    CONDITION = ("condition", "product condition")
    WARRANTY_PERIOD = ("warranty period", "warranty")
    WARRANTY_TYPE = ("warranty type",)

    @property
    def fragments(self) -> tuple[str, ...]:
        return self.value


DEFAULT_CONDITION = "New"


def normalize_attributes(attributes: Iterable[ProductAttribute]) -> dict[str, str]:
    """Map lower-cased attribute names to their comma-joined options.

    The first attribute wins when two names normalize to the same key.
    """

    normalized: dict[str, str] = {}
    for attribute in attributes:
        name = attribute.name.strip().lower()
        if name and name not in normalized:
            normalized[name] = ", ".join(attribute.options)
    return normalized


def attribute_value(product: Product, key: AttributeKey) -> str:
    normalized = normalize_attributes(product.attributes)
    for fragment in key.fragments:
        for name, value in normalized.items():
            if fragment in name:
                return value
    return ""


def brand_name(product: Product) -> str:
    """Brand from attributes, then from the brand taxonomy."""

    from_attribute = attribute_value(product, AttributeKey.BRAND)
    if from_attribute:
        return from_attribute
    if product.brands:
        return product.brands[0].name
    return ""


def product_condition(product: Product) -> str:
    return attribute_value(product, AttributeKey.CONDITION) or DEFAULT_CONDITION


def warranty_period(product: Product) -> str:
    return attribute_value(product, AttributeKey.WARRANTY_PERIOD)


def warranty_type(product: Product) -> str:
    return attribute_value(product, AttributeKey.WARRANTY_TYPE)


def product_specs(product: Product) -> dict[str, str]:
    """All recognized attributes for the product detail view."""

    return {
        "brand": brand_name(product),
        "condition": product_condition(product),
        "warranty_period": warranty_period(product),
        "warranty_type": warranty_type(product),
    }

"""Text and price formatting helpers used by the page views."""

from __future__ import annotations

import math
import re

_HTML_TAG = re.compile(r"<[^>]*>")


def format_price(price: str | float | int | None) -> str:
    """Format a price in rupees with thousands separators, e.g. ``Rs. 12,500``."""

    try:
        value = float(price)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return "Rs. 0"
    if math.isnan(value) or math.isinf(value):
        return "Rs. 0"

    value = round(value, 3)
    if value.is_integer():
        return f"Rs. {int(value):,}"
    return f"Rs. {value:,.3f}".rstrip("0")


def strip_html(html: str) -> str:
    return _HTML_TAG.sub("", html or "").strip()


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."

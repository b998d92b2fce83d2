"""Filtering, search, sorting, pagination and statistics over products.

All functions are pure: they return new lists and never mutate their input.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from src.catalog_api.core.services.query_helpers import (
    SORTABLE_FIELDS,
    parse_bool,
    parse_number,
)
from src.catalog_api.entities.service.product import Product


def filter_by_category(products: Sequence[Product], category: str | None) -> list[Product]:
    """Keep products whose category equals ``category``, ignoring case."""
    if not category or not category.strip():
        return list(products)
    wanted = category.strip().casefold()
    return [p for p in products if p.category.casefold() == wanted]


def filter_by_stock(products: Sequence[Product], in_stock: Any) -> list[Product]:
    """Keep products with the requested availability.

    ``in_stock`` is the raw query value; anything but ``"true"``/``"false"``
    leaves the list unchanged.
    """
    wanted = parse_bool(in_stock)
    if wanted is None:
        return list(products)
    return [p for p in products if p.in_stock is wanted]


def filter_by_price_range(
    products: Sequence[Product], min_price: Any = None, max_price: Any = None
) -> list[Product]:
    """Keep products priced within the inclusive bounds.

    Each bound is ignored on its own when absent or unparseable.
    """
    low = parse_number(min_price)
    high = parse_number(max_price)
    result = list(products)
    if low is not None:
        result = [p for p in result if p.price >= low]
    if high is not None:
        result = [p for p in result if p.price <= high]
    return result


def search_by_name(products: Sequence[Product], query: str | None) -> list[Product]:
    """Case-insensitive substring match on name and description."""
    if not query or not query.strip():
        return list(products)
    needle = query.strip().casefold()
    return [
        p
        for p in products
        if needle in p.name.casefold() or needle in p.description.casefold()
    ]


def _sort_key(value: Any) -> Any:
    if isinstance(value, str):
        return value.casefold()
    # bool is an int subclass, so True sorts after False
    return value


def sort_products(
    products: Sequence[Product], field: str, order: str = "asc"
) -> list[Product]:
    """Stable sort on a wire field name (``price``, ``inStock``...)."""
    attribute = SORTABLE_FIELDS.get(field, field)
    return sorted(
        products,
        key=lambda p: _sort_key(getattr(p, attribute)),
        reverse=order == "desc",
    )


def paginate_products(products: Sequence[Product], skip: int, limit: int) -> list[Product]:
    """The ``[skip, skip + limit)`` slice, clamped to what exists."""
    if skip < 0 or limit <= 0:
        return []
    return list(products[skip : skip + limit])


def _summarize(products: Sequence[Product]) -> dict[str, Any]:
    prices = [p.price for p in products]
    total = len(prices)
    total_value = sum(prices)
    in_stock = sum(1 for p in products if p.in_stock)
    return {
        "totalProducts": total,
        "totalValue": round(total_value, 2),
        "averagePrice": round(total_value / total, 2) if total else 0,
        "minPrice": min(prices) if prices else None,
        "maxPrice": max(prices) if prices else None,
        "inStockCount": in_stock,
        "outOfStockCount": total - in_stock,
    }


def calculate_statistics(products: Sequence[Product]) -> dict[str, Any]:
    """Overall and per-category aggregates.

    An empty collection yields zero totals, an average of 0 and null
    min/max prices.
    """
    by_category: dict[str, list[Product]] = {}
    for product in products:
        by_category.setdefault(product.category, []).append(product)

    return {
        "overall": _summarize(products),
        "byCategory": {
            category: _summarize(members) for category, members in by_category.items()
        },
    }

"""Parsing of list-request query parameters.

Query values always arrive as strings. Every coercion to numbers or booleans
happens here: input that cannot be parsed is treated as absent, so a bad
filter value is ignored instead of failing the request.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from src.catalog_api.core.errors import ApiError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Wire name -> Product attribute
SORTABLE_FIELDS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "description": "description",
    "price": "price",
    "category": "category",
    "inStock": "in_stock",
}

SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    skip: int


@dataclass(frozen=True)
class SortSpec:
    field: str
    order: SortOrder

    @property
    def attribute(self) -> str:
        return SORTABLE_FIELDS[self.field]

    @property
    def descending(self) -> bool:
        return self.order == "desc"

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "order": self.order}


def parse_int(value: Any) -> int | None:
    """Parse an integer query value; ``None`` when absent or malformed."""
    if value is None:
        return None
    text = str(value).strip()
    digits = text.removeprefix("-")
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(text)


def parse_number(value: Any) -> float | None:
    """Parse a finite number; ``None`` when absent, malformed, NaN or infinite."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_bool(value: Any) -> bool | None:
    """Map ``"true"``/``"false"`` (any case) to a bool; anything else is ``None``."""
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    return None


def parse_pagination(
    params: Mapping[str, Any],
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> Pagination:
    """Read ``page`` and ``limit`` from the query.

    ``page`` defaults to 1 and anything below 1 becomes 1. ``limit`` defaults
    to ``default_limit`` and is clamped to ``[1, max_limit]``.
    """
    page = parse_int(params.get("page"))
    if page is None or page < 1:
        page = DEFAULT_PAGE

    limit = parse_int(params.get("limit"))
    if limit is None:
        limit = default_limit
    limit = max(1, min(limit, max_limit))

    return Pagination(page=page, limit=limit, skip=(page - 1) * limit)


def parse_sort(params: Mapping[str, Any]) -> SortSpec | None:
    """Read the ``sort`` directive; ``-field`` sorts descending.

    Raises:
        ApiError: BadRequest when the field is not sortable.
    """
    raw = params.get("sort")
    if raw is None or not str(raw).strip():
        return None

    raw = str(raw).strip()
    order: SortOrder = "asc"
    if raw.startswith("-"):
        order = "desc"
        raw = raw[1:].strip()

    if raw not in SORTABLE_FIELDS:
        allowed = ", ".join(SORTABLE_FIELDS)
        raise ApiError.bad_request(
            f'Cannot sort by "{raw}". Allowed fields: {allowed}'
        )
    return SortSpec(field=raw, order=order)


def create_pagination_meta(total_count: int, page: int, limit: int) -> dict[str, Any]:
    """Navigation summary for one page of ``total_count`` items."""
    total_pages = math.ceil(total_count / limit) if limit > 0 else 0
    has_next = page < total_pages
    has_prev = page > 1
    return {
        "currentPage": page,
        "totalPages": total_pages,
        "totalItems": total_count,
        "itemsPerPage": limit,
        "hasNextPage": has_next,
        "hasPrevPage": has_prev,
        "nextPage": page + 1 if has_next else None,
        "prevPage": page - 1 if has_prev else None,
    }

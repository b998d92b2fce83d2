from .product_helpers import (
    calculate_statistics,
    filter_by_category,
    filter_by_price_range,
    filter_by_stock,
    paginate_products,
    search_by_name,
    sort_products,
)
from .query_helpers import (
    Pagination,
    SortSpec,
    create_pagination_meta,
    parse_pagination,
    parse_sort,
)
from .validation import validate_product_create, validate_product_update

__all__ = [
    "Pagination",
    "SortSpec",
    "calculate_statistics",
    "create_pagination_meta",
    "filter_by_category",
    "filter_by_price_range",
    "filter_by_stock",
    "paginate_products",
    "parse_pagination",
    "parse_sort",
    "search_by_name",
    "sort_products",
    "validate_product_create",
    "validate_product_update",
]

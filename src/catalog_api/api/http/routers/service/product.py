"""Product API router with CRUD, listing, search and statistics."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from loguru import logger
from starlette.responses import JSONResponse

from src.catalog_api.api.http.deps import (
    get_app_config,
    get_product_store,
    parse_product_id,
    read_json_object,
    require_api_key,
)
from src.catalog_api.core.errors import ApiError
from src.catalog_api.core.services import (
    calculate_statistics,
    create_pagination_meta,
    filter_by_category,
    filter_by_price_range,
    filter_by_stock,
    paginate_products,
    parse_pagination,
    parse_sort,
    search_by_name,
    sort_products,
    validate_product_create,
    validate_product_update,
)
from src.catalog_api.entities.service.product import Product, ProductStore
from src.catalog_api.runtime.config.config_data import ConfigData

router = APIRouter(tags=["products"], dependencies=[Depends(require_api_key)])


def _serialize(products: list[Product]) -> list[dict[str, Any]]:
    return [product.to_public() for product in products]


@router.get("")
def list_products(
    request: Request,
    store: ProductStore = Depends(get_product_store),
    config: ConfigData = Depends(get_app_config),
) -> dict[str, Any]:
    """List products with optional search, filters, sorting and pagination."""
    params = request.query_params
    category = params.get("category")
    in_stock = params.get("inStock")
    min_price = params.get("minPrice")
    max_price = params.get("maxPrice")
    query = params.get("q")

    # Reject a bad sort field before doing any work
    sort_spec = parse_sort(params)
    pagination = parse_pagination(
        params,
        default_limit=config.pagination.default_limit,
        max_limit=config.pagination.max_limit,
    )

    # search -> filters -> sort -> count -> paginate
    products = store.list_all()
    products = search_by_name(products, query)
    products = filter_by_category(products, category)
    products = filter_by_stock(products, in_stock)
    products = filter_by_price_range(products, min_price, max_price)
    if sort_spec:
        products = sort_products(products, sort_spec.field, sort_spec.order)

    total_count = len(products)
    page = paginate_products(products, pagination.skip, pagination.limit)

    return {
        "success": True,
        "filters": {
            "category": category or None,
            "inStock": in_stock or None,
            "minPrice": min_price or None,
            "maxPrice": max_price or None,
            "search": query or None,
        },
        "sort": sort_spec.to_dict() if sort_spec else None,
        "pagination": create_pagination_meta(
            total_count, pagination.page, pagination.limit
        ),
        "data": _serialize(page),
    }


@router.get("/search")
def search_products(
    request: Request,
    store: ProductStore = Depends(get_product_store),
    config: ConfigData = Depends(get_app_config),
) -> dict[str, Any]:
    """Search by name/description; ``q`` is required."""
    params = request.query_params
    query = params.get("q")
    category = params.get("category")
    in_stock = params.get("inStock")

    if not query or not query.strip():
        raise ApiError.bad_request('Search query parameter "q" is required')

    pagination = parse_pagination(
        params,
        default_limit=config.pagination.default_limit,
        max_limit=config.pagination.max_limit,
    )

    results = search_by_name(store.list_all(), query)
    results = filter_by_category(results, category)
    results = filter_by_stock(results, in_stock)

    total_count = len(results)
    page = paginate_products(results, pagination.skip, pagination.limit)

    return {
        "success": True,
        "query": query,
        "filters": {"category": category or None, "inStock": in_stock or None},
        "pagination": create_pagination_meta(
            total_count, pagination.page, pagination.limit
        ),
        "resultsCount": total_count,
        "data": _serialize(page),
    }


@router.get("/stats")
def product_statistics(
    request: Request, store: ProductStore = Depends(get_product_store)
) -> dict[str, Any]:
    """Aggregate statistics, optionally for one category."""
    category = request.query_params.get("category")
    products = filter_by_category(store.list_all(), category)
    return {
        "success": True,
        "filter": {"category": category} if category else None,
        "statistics": calculate_statistics(products),
    }


@router.get("/{product_id}")
def get_product(
    product_id: str, store: ProductStore = Depends(get_product_store)
) -> dict[str, Any]:
    """Get a product by ID."""
    product = store.get(parse_product_id(product_id))
    return {"success": True, "data": product.to_public()}


@router.post("", status_code=201)
async def create_product(
    request: Request, store: ProductStore = Depends(get_product_store)
) -> JSONResponse:
    """Create a product after validating the body."""
    payload = validate_product_create(await read_json_object(request))

    with store.locked():
        if store.find_by_name(payload.name) is not None:
            raise ApiError.conflict(f'Product with name "{payload.name}" already exists')
        product = store.create(payload)

    logger.bind(product_id=product.id).info("product.created")
    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "message": "Product created successfully",
            "data": product.to_public(),
        },
    )


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    request: Request,
    store: ProductStore = Depends(get_product_store),
) -> dict[str, Any]:
    """Update only the fields present in the body."""
    item_id = parse_product_id(product_id)
    payload = validate_product_update(await read_json_object(request))

    with store.locked():
        store.index_of(item_id)
        if payload.name is not None:
            if store.find_by_name(payload.name, exclude_id=item_id) is not None:
                raise ApiError.conflict(
                    f'Product with name "{payload.name}" already exists'
                )
        product = store.update(item_id, payload)

    logger.bind(product_id=item_id, fields=sorted(payload.changes())).info(
        "product.updated"
    )
    return {
        "success": True,
        "message": "Product updated successfully",
        "data": product.to_public(),
    }


@router.delete("/{product_id}")
def delete_product(
    product_id: str, store: ProductStore = Depends(get_product_store)
) -> dict[str, Any]:
    """Delete a product and return the removed record."""
    deleted = store.delete(parse_product_id(product_id))
    logger.bind(product_id=deleted.id).info("product.deleted")
    return {
        "success": True,
        "message": "Product deleted successfully",
        "data": deleted.to_public(),
    }

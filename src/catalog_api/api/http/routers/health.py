"""Public endpoints: liveness text, health status and the API catalog."""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import PlainTextResponse

from src.catalog_api.api.http.deps import get_app_config, get_product_store
from src.catalog_api.entities.service.product import ProductStore
from src.catalog_api.runtime.config.config_data import ConfigData

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Hello World"


@router.get("/health")
async def health(
    config: ConfigData = Depends(get_app_config),
    store: ProductStore = Depends(get_product_store),
) -> dict[str, Any]:
    """Liveness probe; returns 200 as long as the process is serving."""
    return {
        "success": True,
        "status": "healthy",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config.app.environment,
        "products": store.count(),
    }


def endpoint_catalog(config: ConfigData) -> dict[str, Any]:
    """Machine-readable description of the public API."""
    return {
        "success": True,
        "message": f"{config.app.name} Documentation",
        "version": config.app.version,
        "endpoints": {
            "products": {
                "listAll": "GET /api/products",
                "getOne": "GET /api/products/:id",
                "create": "POST /api/products",
                "update": "PUT /api/products/:id",
                "delete": "DELETE /api/products/:id",
                "search": "GET /api/products/search",
                "statistics": "GET /api/products/stats",
            },
            "queryParameters": {
                "pagination": "?page=1&limit=10",
                "filtering": "?category=Electronics&inStock=true&minPrice=50&maxPrice=500",
                "sorting": "?sort=price (or ?sort=-price for descending)",
                "search": "?q=laptop",
            },
        },
        "authentication": f"Required: {config.security.api_key_header} header",
    }


@router.get("/api")
async def api_documentation(
    config: ConfigData = Depends(get_app_config),
) -> dict[str, Any]:
    return endpoint_catalog(config)

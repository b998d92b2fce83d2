from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from src.catalog_api.api.http.app import create_app
from src.catalog_api.entities.service.product import (
    SAMPLE_PRODUCTS,
    Product,
    ProductStore,
)
from src.catalog_api.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    LoggingConfig,
    PaginationConfig,
    SecurityConfig,
)

_PRIMARY_KEY = "test-key-primary"
_SECONDARY_KEY = "test-key-secondary"


@pytest.fixture
def api_key() -> str:
    return _PRIMARY_KEY


@pytest.fixture
def auth_headers(api_key: str) -> dict[str, str]:
    return {"x-api-key": api_key}


@pytest.fixture
def test_config() -> ConfigData:
    return ConfigData(
        app=AppConfig(environment="test"),
        security=SecurityConfig(api_keys=[_PRIMARY_KEY, _SECONDARY_KEY]),
        pagination=PaginationConfig(default_limit=10, max_limit=50),
        logging=LoggingConfig(level="WARNING", file=None),
    )


@pytest.fixture
def sample_products() -> list[Product]:
    return [product.model_copy() for product in SAMPLE_PRODUCTS]


@pytest.fixture
def store(sample_products: list[Product]) -> ProductStore:
    """Fresh store seeded with the three sample products (IDs 1-3)."""
    return ProductStore(sample_products)


@pytest.fixture
def make_product() -> Callable[..., Product]:
    def _make(product_id: int, **overrides) -> Product:
        fields = {
            "id": product_id,
            "name": f"Product {product_id}",
            "description": "",
            "price": 10.0,
            "category": "General",
            "in_stock": True,
        }
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest.fixture
def client(test_config: ConfigData, store: ProductStore) -> Generator[TestClient]:
    """Test client over an app bound to the fixture store."""
    app = create_app(test_config, store)
    with TestClient(app) as test_client:
        yield test_client

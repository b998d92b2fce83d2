"""In-memory repository for products."""

from __future__ import annotations

import threading
import unicodedata
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from loguru import logger

from src.catalog_api.core.errors import ApiError

from .entity import Product, ProductCreate, ProductUpdate


def normalize_name(name: str) -> str:
    """Comparison key for product names: trimmed, NFKC-normalized, case-folded."""
    return unicodedata.normalize("NFKC", name.strip()).casefold()


class ProductStore:
    """Ordered, process-local collection of products.

    All mutations run under one re-entrant lock. Callers that need a
    check-then-mutate sequence (duplicate-name check followed by a create)
    hold ``locked()`` around both steps so they commit atomically.
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._lock = threading.RLock()
        self._products: list[Product] = []
        self._next_id = 1
        self.reset(products)

    @contextmanager
    def locked(self) -> Iterator[ProductStore]:
        with self._lock:
            yield self

    def reset(self, products: Iterable[Product] = ()) -> None:
        """Replace the contents; the ID counter continues past the highest ID."""
        with self._lock:
            self._products = [product.model_copy() for product in products]
            highest = max((p.id for p in self._products), default=0)
            self._next_id = max(self._next_id, highest + 1)

    def count(self) -> int:
        with self._lock:
            return len(self._products)

    def list_all(self) -> list[Product]:
        """Snapshot of every product in insertion order."""
        with self._lock:
            return [product.model_copy() for product in self._products]

    def index_of(self, product_id: int) -> int:
        with self._lock:
            for index, product in enumerate(self._products):
                if product.id == product_id:
                    return index
        raise ApiError.not_found(f"Product with ID {product_id} not found")

    def get(self, product_id: int) -> Product:
        with self._lock:
            return self._products[self.index_of(product_id)].model_copy()

    def find_by_name(self, name: str, exclude_id: int | None = None) -> Product | None:
        """Return the live product whose name matches ``name``, if any."""
        key = normalize_name(name)
        with self._lock:
            for product in self._products:
                if product.id == exclude_id:
                    continue
                if normalize_name(product.name) == key:
                    return product.model_copy()
        return None

    def create(self, payload: ProductCreate) -> Product:
        with self._lock:
            product = Product(id=self._next_id, **payload.model_dump())
            self._next_id += 1
            self._products.append(product)
            logger.debug("Created product {} ({})", product.id, product.name)
            return product.model_copy()

    def update(self, product_id: int, payload: ProductUpdate) -> Product:
        """Apply only the supplied fields of ``payload`` in place."""
        with self._lock:
            product = self._products[self.index_of(product_id)]
            for field_name, value in payload.changes().items():
                setattr(product, field_name, value)
            logger.debug("Updated product {}", product_id)
            return product.model_copy()

    def delete(self, product_id: int) -> Product:
        with self._lock:
            removed = self._products.pop(self.index_of(product_id))
            logger.debug("Deleted product {}", product_id)
            return removed


SAMPLE_PRODUCTS: tuple[Product, ...] = (
    Product(
        id=1,
        name="Laptop Pro",
        description="High-performance laptop",
        price=1299.99,
        category="Electronics",
        in_stock=True,
    ),
    Product(
        id=2,
        name="Wireless Mouse",
        description="Ergonomic mouse",
        price=24.50,
        category="Accessories",
        in_stock=True,
    ),
    Product(
        id=3,
        name="Coffee Maker",
        description="12-cup automatic brewer",
        price=85.00,
        category="Home Goods",
        in_stock=False,
    ),
)

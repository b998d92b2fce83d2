"""Entity package: Product."""

from .entity import Product, ProductCreate, ProductUpdate
from .repository import SAMPLE_PRODUCTS, ProductStore, normalize_name

__all__ = [
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "ProductStore",
    "SAMPLE_PRODUCTS",
    "normalize_name",
]

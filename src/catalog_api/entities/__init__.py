"""Entities organized by business concept.

Each entity package holds its domain model (entity.py) and its
in-memory data access layer (repository.py).
"""

from .service.product import Product, ProductCreate, ProductStore, ProductUpdate

__all__ = [
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "ProductStore",
]

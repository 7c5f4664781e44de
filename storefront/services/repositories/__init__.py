"""Repositories over external data sources."""
from .product_repo import ProductRepository

__all__ = ["ProductRepository"]

"""Pytest configuration and fixtures"""
import os
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

# Set test environment variables before settings are first read
os.environ.setdefault("CATALOG_BASE_URL", "https://catalog.test")
os.environ.setdefault("CATALOG_MAX_RETRIES", "3")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from storefront.cart import CartStore
from storefront.config import Settings
from storefront.models import Product
from storefront.services.catalog_client import CatalogClient
from storefront.services.repositories import ProductRepository
from storefront.session import ShopSession
from storefront.wishlist import WishlistStore

CATALOG_URL = "https://catalog.test"


def make_product(product_id: int, price: str = "10.00", category: str = "beauty", **extra) -> Product:
    """Build a Product with sensible defaults for tests."""
    data = {
        "id": product_id,
        "title": f"Product {product_id}",
        "price": Decimal(price),
        "category": category,
        "rating": Decimal("4.5"),
        "stock": 10,
    }
    data.update(extra)
    return Product(**data)


@pytest.fixture
def product_1():
    """Sample product priced $10.00"""
    return make_product(1, "10.00", "beauty")


@pytest.fixture
def product_2():
    """Sample product priced $25.00"""
    return make_product(2, "25.00", "fragrances")


@pytest.fixture
def product_3():
    """Sample product priced $7.50"""
    return make_product(3, "7.50", "beauty")


@pytest.fixture
def catalog_products(product_1, product_2, product_3):
    return {p.id: p for p in (product_1, product_2, product_3)}


@pytest.fixture
def cart():
    return CartStore()


@pytest.fixture
def wishlist():
    return WishlistStore()


@pytest.fixture
def settings():
    """Settings pointing at a fake catalog host"""
    return Settings(catalog_base_url=CATALOG_URL, catalog_timeout_seconds=5.0, catalog_max_retries=3)


@pytest.fixture
def catalog_client(settings):
    """Real CatalogClient without backoff sleeps (HTTP mocked with respx)"""
    return CatalogClient(settings, retry_wait_seconds=0)


@pytest.fixture
def mock_catalog_client(catalog_products):
    """CatalogClient stand-in serving the sample products"""
    client = Mock(spec=CatalogClient)
    client.get_products = AsyncMock(return_value=list(catalog_products.values()))
    client.get_product = AsyncMock(side_effect=lambda product_id: catalog_products.get(product_id))
    client.get_products_by_category = AsyncMock(
        side_effect=lambda category: [p for p in catalog_products.values() if p.category == category]
    )
    client.get_categories = AsyncMock(return_value=["beauty", "fragrances"])
    client.search_products = AsyncMock(return_value=[])
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def product_repo(mock_catalog_client):
    return ProductRepository(mock_catalog_client)


@pytest.fixture
def shop(settings, product_repo):
    """ShopSession wired to the mocked catalog"""
    return ShopSession(settings=settings, catalog=product_repo)


@pytest.fixture
def product_factory():
    """Build extra products inside a test: product_factory(7, "3.50")"""
    return make_product

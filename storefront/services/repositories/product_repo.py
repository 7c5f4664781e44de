"""
Product Repository

Wraps CatalogClient and returns Result values instead of raising, so
catalog failures reach the presentation layer as data. Also holds the
small pieces of catalog business logic (featured, on sale, related).
"""
from decimal import Decimal
from typing import Optional

from storefront.errors import ERROR_PRODUCT_NOT_FOUND
from storefront.exceptions import NotFoundException
from storefront.logging import get_logger
from storefront.models import Product
from storefront.result import Result
from storefront.services.catalog_client import CatalogClient

logger = get_logger(__name__)

FEATURED_MIN_RATING = Decimal("4.0")
FEATURED_LIMIT = 10
SALE_MIN_PRICE = Decimal("50")
SALE_LIMIT = 8
RELATED_DEFAULT_LIMIT = 4


class ProductRepository:
    """Product data access for the storefront."""

    def __init__(self, client: CatalogClient) -> None:
        self.client = client

    async def get_products(self, limit: Optional[int] = None, skip: Optional[int] = None) -> Result[list[Product]]:
        return await self._run(lambda: self.client.get_products(limit=limit, skip=skip), "fetch products")

    async def get_product(self, product_id: int) -> Result[Optional[Product]]:
        return await self._run(lambda: self.client.get_product(product_id), f"fetch product {product_id}")

    async def require_product(self, product_id: int) -> Result[Product]:
        """Like get_product, but a missing product is a NotFoundException failure."""
        result = await self.get_product(product_id)
        if result.is_success and result.data_or_none is None:
            return Result.failure(
                NotFoundException(ERROR_PRODUCT_NOT_FOUND, resource_type="product", resource_id=product_id)
            )
        return result

    async def get_products_by_category(self, category: str) -> Result[list[Product]]:
        return await self._run(
            lambda: self.client.get_products_by_category(category),
            f"fetch products for category {category}",
        )

    async def get_categories(self) -> Result[list[str]]:
        return await self._run(self.client.get_categories, "fetch categories")

    async def search_products(self, query: str) -> Result[list[Product]]:
        query = (query or "").strip()
        if not query:
            return Result.success([])
        return await self._run(lambda: self.client.search_products(query), "search products")

    async def get_featured_products(self) -> Result[list[Product]]:
        """Products rated 4.0 or higher, at most 10."""
        result = await self.get_products()
        return result.map(
            lambda products: [p for p in products if p.rating >= FEATURED_MIN_RATING][:FEATURED_LIMIT]
        )

    async def get_products_on_sale(self) -> Result[list[Product]]:
        """Higher-priced items (over 50), at most 8."""
        result = await self.get_products()
        return result.map(lambda products: [p for p in products if p.price > SALE_MIN_PRICE][:SALE_LIMIT])

    async def get_related_products(self, product_id: int, limit: int = RELATED_DEFAULT_LIMIT) -> Result[list[Product]]:
        """Other products from the same category."""
        target = await self.get_product(product_id)
        if target.is_failure:
            return target
        product = target.data_or_none
        if product is None:
            return Result.success([])

        same_category = await self.get_products_by_category(product.category)
        return same_category.map(lambda products: [p for p in products if p.id != product_id][:limit])

    async def is_product_available(self, product_id: int) -> Result[bool]:
        result = await self.get_product(product_id)
        return result.map(lambda product: product is not None and product.stock > 0)

    async def _run(self, operation, description: str) -> Result:
        result = await Result.wrap_async(operation)
        if result.is_failure:
            logger.warning("Failed to %s: %s", description, result.error_message_or_none)
        return result

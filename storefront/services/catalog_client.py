"""
Catalog Client - DummyJSON product API.

Async httpx client with a lazily created shared connection pool.
Transport and HTTP failures are translated into the storefront exception
hierarchy; timeouts, connection errors and 408/429/5xx responses are
retried with exponential backoff.
"""
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from storefront.config import Settings, get_settings
from storefront.errors import (
    ERROR_CATALOG_BAD_RESPONSE,
    ERROR_CATALOG_TIMEOUT,
    ERROR_CATALOG_UNAVAILABLE,
    ERROR_PRODUCT_NOT_FOUND,
)
from storefront.exceptions import (
    ConnectionException,
    NotFoundException,
    ParseException,
    ServerException,
    TimeoutException,
)
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.models import Product

logger = get_logger(__name__)

PRODUCTS_ENDPOINT = "/products"
CATEGORIES_ENDPOINT = "/products/categories"
PRODUCTS_BY_CATEGORY_ENDPOINT = "/products/category"
SEARCH_ENDPOINT = "/products/search"

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "storefront/1.0",
}


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, (TimeoutException, ConnectionException)):
        return True
    return isinstance(exc, ServerException) and exc.status_code in RETRYABLE_STATUS_CODES


class CatalogClient:
    """Read-only client for the product catalog."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        retry_wait_seconds: float = 1.0,
    ) -> None:
        self.settings = settings or get_settings()
        self.base_url = self.settings.catalog_base_url.rstrip("/")
        self.retry_wait_seconds = retry_wait_seconds
        self._http_client = http_client

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Create the shared httpx client on first use."""
        if self._http_client is None:
            timeout = self.settings.catalog_timeout_seconds
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(timeout, connect=min(timeout, 10.0)),
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                headers=DEFAULT_HEADERS,
                follow_redirects=True,
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    # ==================== TRANSPORT ====================

    async def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.catalog_max_retries),
            wait=wait_exponential(multiplier=self.retry_wait_seconds, max=10),
            retry=retry_if_exception(_is_retryable),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self._get_json_once(path, params)

    async def _get_json_once(self, path: str, params: Optional[dict[str, Any]]) -> Any:
        client = await self._get_http_client()
        url = f"{self.base_url}{path}"
        try:
            resp = await client.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.warning("Catalog timeout: %s", path)
            raise TimeoutException(
                ERROR_CATALOG_TIMEOUT,
                timeout_seconds=self.settings.catalog_timeout_seconds,
                original_error=e,
            ) from e
        except httpx.TransportError as e:
            logger.warning("Catalog connection error on %s: %s", path, type(e).__name__)
            raise ConnectionException(ERROR_CATALOG_UNAVAILABLE, original_error=e) from e

        if resp.status_code == 404:
            raise NotFoundException(ERROR_PRODUCT_NOT_FOUND, resource_type="product")
        if resp.status_code != 200:
            logger.warning("Catalog %s returned HTTP %s", path, resp.status_code)
            raise ServerException(
                f"{ERROR_CATALOG_UNAVAILABLE}: HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise ParseException(ERROR_CATALOG_BAD_RESPONSE, resource_type="product") from e

    # ==================== PARSING ====================

    @staticmethod
    def _parse_product(data: Any) -> Product:
        if not isinstance(data, dict):
            raise ParseException(ERROR_CATALOG_BAD_RESPONSE, resource_type="product")
        try:
            return Product.from_api(data)
        except ValidationError as e:
            raise ParseException(ERROR_CATALOG_BAD_RESPONSE, resource_type="product", original_error=e) from e

    @classmethod
    def _parse_product_list(cls, payload: Any) -> list[Product]:
        products = payload.get("products") if isinstance(payload, dict) else None
        if not isinstance(products, list):
            raise ParseException(ERROR_CATALOG_BAD_RESPONSE, resource_type="product")
        return [cls._parse_product(item) for item in products]

    # ==================== ENDPOINTS ====================

    async def get_products(self, limit: Optional[int] = None, skip: Optional[int] = None) -> list[Product]:
        params = {}
        if limit is not None:
            params["limit"] = limit
        if skip is not None:
            params["skip"] = skip
        payload = await self._get_json(PRODUCTS_ENDPOINT, params or None)
        return self._parse_product_list(payload)

    async def get_product(self, product_id: int) -> Optional[Product]:
        """Fetch one product; None when the catalog has no such id."""
        try:
            payload = await self._get_json(f"{PRODUCTS_ENDPOINT}/{int(product_id)}")
        except NotFoundException:
            return None
        return self._parse_product(payload)

    async def get_products_by_category(self, category: str) -> list[Product]:
        payload = await self._get_json(f"{PRODUCTS_BY_CATEGORY_ENDPOINT}/{quote(category, safe='')}")
        return self._parse_product_list(payload)

    async def get_categories(self) -> list[str]:
        """
        Category identifiers.

        Newer catalog versions return objects ({slug, name, url}); older ones
        return plain strings. The slug is what the category endpoint expects.
        """
        payload = await self._get_json(CATEGORIES_ENDPOINT)
        if not isinstance(payload, list):
            raise ParseException(ERROR_CATALOG_BAD_RESPONSE, resource_type="category")
        categories = []
        for entry in payload:
            if isinstance(entry, dict):
                value = entry.get("slug") or entry.get("name")
            else:
                value = entry
            categories.append(str(value) if value else "Unknown")
        return categories

    async def search_products(self, query: str) -> list[Product]:
        logger.debug("Catalog search: %s", sanitize_string_for_logging(query))
        payload = await self._get_json(SEARCH_ENDPOINT, {"q": query})
        return self._parse_product_list(payload)

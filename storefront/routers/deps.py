"""
Shared Dependencies for Routers

The ShopSession lives on app.state; routers reach it through these
dependencies so tests can swap it out.
"""
from typing import NoReturn, Optional

from fastapi import HTTPException, Request

from storefront.errors import ERROR_INTERNAL
from storefront.exceptions import AppException
from storefront.models import Product
from storefront.services.error_handler import ErrorType
from storefront.session import ShopSession

STATUS_BY_ERROR_TYPE = {
    ErrorType.NETWORK: 503,
    ErrorType.AUTHENTICATION: 401,
    ErrorType.VALIDATION: 400,
    ErrorType.UNKNOWN: 500,
}


def get_shop(request: Request) -> ShopSession:
    """Get the ShopSession attached to the running app."""
    return request.app.state.shop


def raise_http_error(shop: ShopSession, error: Optional[AppException]) -> NoReturn:
    """Convert an AppException into an HTTPException with a user message."""
    info = shop.error_handler.handle_error(error or AppException(ERROR_INTERNAL))
    if info.type == ErrorType.DATA:
        status = 404 if info.code == "NOT_FOUND" else 502
    else:
        status = STATUS_BY_ERROR_TYPE.get(info.type, 500)
    raise HTTPException(status_code=status, detail=info.to_dict())


async def load_product(shop: ShopSession, product_id: int) -> Product:
    """Fetch a product for a cart/wishlist command or fail the request."""
    result = await shop.catalog.require_product(product_id)
    if result.is_failure:
        raise_http_error(shop, result.error_or_none)
    return result.data_or_raise()

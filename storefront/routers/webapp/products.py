"""
WebApp Products Router

Read-only catalog endpoints. Failures come back from ProductRepository
as Results and are turned into HTTP errors here.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.routers.deps import get_shop, raise_http_error
from storefront.session import ShopSession

router = APIRouter(tags=["webapp-products"])


def _with_flags(shop: ShopSession, products) -> list[dict]:
    """Product dicts annotated with the session's cart/wishlist state."""
    out = []
    for product in products:
        data = product.to_dict()
        data["in_cart"] = shop.cart.is_in_cart(product)
        data["cart_quantity"] = shop.cart.quantity_of(product)
        data["is_favorite"] = shop.wishlist.is_favorite(product)
        out.append(data)
    return out


@router.get("/products")
async def list_products(
    category: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    skip: Optional[int] = Query(default=None, ge=0),
    shop: ShopSession = Depends(get_shop),
):
    """List products, optionally limited to one category."""
    if category:
        result = await shop.catalog.get_products_by_category(category)
    else:
        result = await shop.catalog.get_products(limit=limit, skip=skip)
    if result.is_failure:
        raise_http_error(shop, result.error_or_none)
    return {"products": _with_flags(shop, result.data_or_raise())}


@router.get("/products/categories")
async def list_categories(shop: ShopSession = Depends(get_shop)):
    result = await shop.catalog.get_categories()
    if result.is_failure:
        raise_http_error(shop, result.error_or_none)
    return {"categories": result.data_or_raise()}


@router.get("/products/search")
async def search_products(q: str = Query(default="", max_length=200), shop: ShopSession = Depends(get_shop)):
    result = await shop.catalog.search_products(q)
    if result.is_failure:
        raise_http_error(shop, result.error_or_none)
    return {"query": q.strip(), "products": _with_flags(shop, result.data_or_raise())}


@router.get("/products/featured")
async def featured_products(shop: ShopSession = Depends(get_shop)):
    result = await shop.catalog.get_featured_products()
    if result.is_failure:
        raise_http_error(shop, result.error_or_none)
    return {"products": _with_flags(shop, result.data_or_raise())}


@router.get("/products/{product_id}")
async def get_product(product_id: int, shop: ShopSession = Depends(get_shop)):
    """Product details plus related products from the same category."""
    result = await shop.catalog.require_product(product_id)
    if result.is_failure:
        raise_http_error(shop, result.error_or_none)

    product = _with_flags(shop, [result.data_or_raise()])[0]
    related = await shop.catalog.get_related_products(product_id)
    # Related products are optional decoration
    product["related"] = _with_flags(shop, related.get_or_else([]))
    return product

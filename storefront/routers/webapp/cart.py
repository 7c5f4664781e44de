"""
WebApp Cart Router

Shopping cart endpoints for the session's CartStore.
Commands that only touch lines already in the cart never hit the catalog.
"""
from fastapi import APIRouter, Depends

from storefront.logging import get_logger
from storefront.routers.deps import get_shop, load_product
from storefront.session import ShopSession
from .models import AddToCartRequest, CartProductRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(tags=["webapp-cart"])


@router.get("/cart")
async def get_cart(shop: ShopSession = Depends(get_shop)):
    return shop.cart.summary()


@router.post("/cart/add")
async def add_to_cart(request: AddToCartRequest, shop: ShopSession = Depends(get_shop)):
    product = await load_product(shop, request.product_id)
    shop.cart.add_item(product, request.quantity)
    return shop.cart.summary()


@router.post("/cart/remove-one")
async def remove_one_from_cart(request: CartProductRequest, shop: ShopSession = Depends(get_shop)):
    line = shop.cart.state.get_item(request.product_id)
    if line is not None:
        shop.cart.remove_single_unit(line.product)
    return shop.cart.summary()


@router.patch("/cart/item")
async def update_cart_item(request: UpdateCartItemRequest, shop: ShopSession = Depends(get_shop)):
    """Set an absolute quantity; 0 or less removes the line."""
    line = shop.cart.state.get_item(request.product_id)
    if line is not None:
        shop.cart.update_quantity(line.product, request.quantity)
    elif request.quantity > 0:
        product = await load_product(shop, request.product_id)
        shop.cart.update_quantity(product, request.quantity)
    return shop.cart.summary()


@router.delete("/cart/item/{product_id}")
async def remove_cart_item(product_id: int, shop: ShopSession = Depends(get_shop)):
    line = shop.cart.state.get_item(product_id)
    if line is not None:
        shop.cart.remove_item(line.product)
    return shop.cart.summary()


@router.delete("/cart")
async def clear_cart(shop: ShopSession = Depends(get_shop)):
    shop.cart.clear()
    return shop.cart.summary()

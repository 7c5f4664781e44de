"""WebApp Wishlist Router"""
from typing import Optional

from fastapi import APIRouter, Depends

from storefront.routers.deps import get_shop, load_product
from storefront.session import ShopSession
from storefront.wishlist import WishlistState
from .models import ToggleFavoriteRequest

router = APIRouter(tags=["webapp-wishlist"])


@router.get("/wishlist")
async def get_wishlist(category: Optional[str] = None, shop: ShopSession = Depends(get_shop)):
    """Favorites; with ?category= every field describes only that category."""
    if category:
        return WishlistState(items=tuple(shop.wishlist.by_category(category))).to_dict()
    return shop.wishlist.summary()


@router.post("/wishlist/toggle")
async def toggle_favorite(request: ToggleFavoriteRequest, shop: ShopSession = Depends(get_shop)):
    """Heart button: flips membership and returns the new state."""
    product = shop.wishlist.get(request.product_id) or await load_product(shop, request.product_id)
    is_favorite = shop.wishlist.toggle_favorite(product)
    return {"product_id": product.id, "is_favorite": is_favorite, "item_count": shop.wishlist.item_count}


@router.delete("/wishlist/{product_id}")
async def remove_favorite(product_id: int, shop: ShopSession = Depends(get_shop)):
    shop.wishlist.remove_favorite_by_id(product_id)
    return shop.wishlist.summary()


@router.delete("/wishlist")
async def clear_wishlist(shop: ShopSession = Depends(get_shop)):
    shop.wishlist.clear()
    return shop.wishlist.summary()

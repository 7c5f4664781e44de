"""
WebApp API Router

Combines the storefront webapp routers under one APIRouter.
"""
from fastapi import APIRouter

from .auth import router as auth_router
from .cart import router as cart_router
from .products import router as products_router
from .wishlist import router as wishlist_router

router = APIRouter(prefix="/api")

router.include_router(products_router)
router.include_router(cart_router)
router.include_router(wishlist_router)
router.include_router(auth_router)

__all__ = ["router"]

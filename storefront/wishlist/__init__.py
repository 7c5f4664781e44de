"""Wishlist package: favorites store and its snapshot model."""
from .models import WishlistState
from .service import WishlistStore

__all__ = [
    "WishlistState",
    "WishlistStore",
]

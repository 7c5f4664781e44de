"""Cart package: line item models and the session cart store."""
from .models import LineItem, CartState
from .service import CartStore

__all__ = [
    "LineItem",
    "CartState",
    "CartStore",
]

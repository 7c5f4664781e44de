"""Wishlist snapshot model."""
from dataclasses import dataclass
from typing import Optional

from storefront.models import Product


@dataclass(frozen=True)
class WishlistState:
    """Favorited products in insertion order (order is for display only)."""
    items: tuple[Product, ...] = ()

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def categories(self) -> list[str]:
        """Distinct categories, first-seen order."""
        return list(dict.fromkeys(product.category for product in self.items))

    def is_favorite(self, product_id: int) -> bool:
        return any(product.id == product_id for product in self.items)

    def get(self, product_id: int) -> Optional[Product]:
        return next((product for product in self.items if product.id == product_id), None)

    def by_category(self, category: str) -> list[Product]:
        return [product for product in self.items if product.category == category]

    def to_dict(self) -> dict:
        return {
            "items": [product.to_dict() for product in self.items],
            "item_count": self.item_count,
            "categories": self.categories,
            "is_empty": self.is_empty,
        }

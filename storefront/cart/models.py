"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from storefront.models import Product
from storefront.services.money import format_money, multiply, round_money, sum_money, to_float


@dataclass
class LineItem:
    """A product paired with its cart quantity (always >= 1 inside a cart)."""
    product: Product
    quantity: int = 1

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def unit_price(self) -> Decimal:
        return self.product.price

    @property
    def total_price(self) -> Decimal:
        """Price for all units."""
        return multiply(self.product.price, self.quantity)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product.id,
            "title": self.product.title,
            "category": self.product.category,
            "image": self.product.display_image or None,
            "quantity": self.quantity,
            "unit_price": to_float(self.unit_price),
            "total_price": to_float(round_money(self.total_price)),
        }


@dataclass(frozen=True)
class CartState:
    """
    Snapshot of a cart handed to listeners and callers.

    item_count and total_amount are folds over items, computed on access.
    """
    items: tuple[LineItem, ...] = ()

    @property
    def item_count(self) -> int:
        """Total number of units in the cart."""
        return sum(item.quantity for item in self.items)

    @property
    def total_amount(self) -> Decimal:
        """Sum of quantity * price over every line."""
        return sum_money(item.total_price for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def get_item(self, product_id: int) -> Optional[LineItem]:
        return next((item for item in self.items if item.product.id == product_id), None)

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "item_count": self.item_count,
            "total_amount": to_float(round_money(self.total_amount)),
            "total_display": format_money(self.total_amount),
            "is_empty": self.is_empty,
        }

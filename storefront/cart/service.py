"""Cart store: session-scoped, in-memory line items."""
import threading
from decimal import Decimal
from typing import Optional

from storefront.events import ChangeNotifier
from storefront.logging import get_logger
from storefront.models import Product
from storefront.services.money import ZERO
from .models import CartState, LineItem

logger = get_logger(__name__)


class CartStore(ChangeNotifier):
    """
    Shopping cart for one session.

    Invariants:
    - at most one LineItem per product id, kept in insertion order
    - every stored quantity is >= 1; anything that would go lower removes the line

    Every command is total: bad quantities are normalized, never rejected.
    Subscribers get a CartState snapshot after each command that changed
    the cart.
    """

    def __init__(self) -> None:
        super().__init__()
        self._items: list[LineItem] = []
        self._lock = threading.RLock()

    # ==================== COMMANDS ====================

    def add_item(self, product: Product, quantity: int = 1) -> CartState:
        """Add units of a product, merging into an existing line."""
        if quantity <= 0:
            return self.state

        with self._lock:
            existing = self._find(product.id)
            if existing is not None:
                existing.quantity += quantity
                # Keep the freshest catalog record for the line
                existing.product = product
            else:
                self._items.append(LineItem(product=product, quantity=quantity))
            state = self._snapshot()
            version = self._next_version()

        logger.debug("Cart add: product=%s qty=+%d", product.id, quantity)
        self._notify(state, version)
        return state

    def remove_item(self, product: Product) -> CartState:
        """Remove the whole line for a product. Absent products are a no-op."""
        with self._lock:
            before = len(self._items)
            self._items = [item for item in self._items if item.product.id != product.id]
            changed = len(self._items) != before
            state = self._snapshot()
            version = self._next_version()

        if changed:
            logger.debug("Cart remove: product=%s", product.id)
            self._notify(state, version)
        return state

    def remove_single_unit(self, product: Product) -> CartState:
        """Take one unit off a line; the last unit removes the line."""
        with self._lock:
            existing = self._find(product.id)
            if existing is None:
                return self._snapshot()
            if existing.quantity > 1:
                existing.quantity -= 1
            else:
                self._items.remove(existing)
            state = self._snapshot()
            version = self._next_version()

        self._notify(state, version)
        return state

    def update_quantity(self, product: Product, quantity: int) -> CartState:
        """
        Set the absolute quantity for a product.

        quantity <= 0 removes the line; a product not yet in the cart is added.
        """
        if quantity <= 0:
            return self.remove_item(product)

        with self._lock:
            existing = self._find(product.id)
            if existing is None:
                self._items.append(LineItem(product=product, quantity=quantity))
            elif existing.quantity == quantity and existing.product == product:
                return self._snapshot()
            else:
                existing.quantity = quantity
                existing.product = product
            state = self._snapshot()
            version = self._next_version()

        self._notify(state, version)
        return state

    def clear(self) -> CartState:
        with self._lock:
            changed = bool(self._items)
            self._items = []
            state = self._snapshot()
            version = self._next_version()

        if changed:
            logger.debug("Cart cleared")
            self._notify(state, version)
        return state

    # ==================== QUERIES ====================

    @property
    def state(self) -> CartState:
        with self._lock:
            return self._snapshot()

    @property
    def items(self) -> list[LineItem]:
        return list(self.state.items)

    @property
    def item_count(self) -> int:
        return self.state.item_count

    @property
    def total_amount(self) -> Decimal:
        return self.state.total_amount

    @property
    def is_empty(self) -> bool:
        return self.state.is_empty

    def is_in_cart(self, product: Product) -> bool:
        with self._lock:
            return self._find(product.id) is not None

    def quantity_of(self, product: Product) -> int:
        with self._lock:
            item = self._find(product.id)
            return item.quantity if item else 0

    def item_total(self, product: Product) -> Decimal:
        with self._lock:
            item = self._find(product.id)
            return item.total_price if item else ZERO

    def summary(self) -> dict:
        """Cart summary for the presentation layer."""
        return self.state.to_dict()

    # ==================== INTERNALS ====================

    def _find(self, product_id: int) -> Optional[LineItem]:
        return next((item for item in self._items if item.product.id == product_id), None)

    def _snapshot(self) -> CartState:
        # Copy lines so later mutations don't leak into handed-out snapshots
        return CartState(items=tuple(LineItem(item.product, item.quantity) for item in self._items))

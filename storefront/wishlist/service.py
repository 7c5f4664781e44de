"""Wishlist store: session-scoped set of favorited products."""
import threading
from typing import Iterable, Optional

from storefront.events import ChangeNotifier
from storefront.logging import get_logger
from storefront.models import Product
from .models import WishlistState

logger = get_logger(__name__)


class WishlistStore(ChangeNotifier):
    """
    Favorites for one session, unique by product id.

    toggle_favorite is the primitive the "heart" button uses; add and
    remove are idempotent. Subscribers get a WishlistState after every
    command that changed membership.
    """

    def __init__(self) -> None:
        super().__init__()
        self._items: list[Product] = []
        self._lock = threading.RLock()

    # ==================== COMMANDS ====================

    def toggle_favorite(self, product: Product) -> bool:
        """Flip membership. Returns True if the product is now a favorite."""
        with self._lock:
            index = self._index(product.id)
            if index is None:
                self._items.append(product)
            else:
                del self._items[index]
            is_favorite = index is None
            state = self._snapshot()
            version = self._next_version()
        logger.debug("Wishlist toggle: product=%s favorite=%s", product.id, is_favorite)
        self._notify(state, version)
        return is_favorite

    def add_to_favorites(self, product: Product) -> WishlistState:
        with self._lock:
            if self._index(product.id) is not None:
                return self._snapshot()
            self._items.append(product)
            state = self._snapshot()
            version = self._next_version()
        logger.debug("Wishlist add: product=%s", product.id)
        self._notify(state, version)
        return state

    def remove_favorite(self, product: Product) -> WishlistState:
        return self.remove_favorite_by_id(product.id)

    def remove_favorite_by_id(self, product_id: int) -> WishlistState:
        with self._lock:
            index = self._index(product_id)
            if index is None:
                return self._snapshot()
            del self._items[index]
            state = self._snapshot()
            version = self._next_version()
        logger.debug("Wishlist remove: product=%s", product_id)
        self._notify(state, version)
        return state

    def add_many(self, products: Iterable[Product]) -> WishlistState:
        """Add every product not already favorited; one notification."""
        with self._lock:
            added = 0
            for product in products:
                if self._index(product.id) is None:
                    self._items.append(product)
                    added += 1
            state = self._snapshot()
            version = self._next_version()
        if added:
            self._notify(state, version)
        return state

    def remove_many(self, product_ids: Iterable[int]) -> WishlistState:
        ids = set(product_ids)
        with self._lock:
            before = len(self._items)
            self._items = [product for product in self._items if product.id not in ids]
            changed = len(self._items) != before
            state = self._snapshot()
            version = self._next_version()
        if changed:
            self._notify(state, version)
        return state

    def clear(self) -> WishlistState:
        with self._lock:
            changed = bool(self._items)
            self._items = []
            state = self._snapshot()
            version = self._next_version()
        if changed:
            logger.debug("Wishlist cleared")
            self._notify(state, version)
        return state

    # ==================== QUERIES ====================

    @property
    def state(self) -> WishlistState:
        with self._lock:
            return self._snapshot()

    @property
    def items(self) -> list[Product]:
        return list(self.state.items)

    @property
    def item_count(self) -> int:
        return self.state.item_count

    def is_favorite(self, product: Product) -> bool:
        with self._lock:
            return self._index(product.id) is not None

    def get(self, product_id: int) -> Optional[Product]:
        return self.state.get(product_id)

    def by_category(self, category: str) -> list[Product]:
        return self.state.by_category(category)

    def count_by_category(self, category: str) -> int:
        return len(self.by_category(category))

    def are_all_favorited(self, products: Iterable[Product]) -> bool:
        with self._lock:
            return all(self._index(product.id) is not None for product in products)

    def summary(self) -> dict:
        return self.state.to_dict()

    # ==================== INTERNALS ====================

    def _index(self, product_id: int) -> Optional[int]:
        for index, product in enumerate(self._items):
            if product.id == product_id:
                return index
        return None

    def _snapshot(self) -> WishlistState:
        return WishlistState(items=tuple(self._items))

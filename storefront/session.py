"""ShopSession - composition root for one storefront session."""
from datetime import timedelta
from typing import Optional

from storefront.auth import AuthSession, UserSession
from storefront.cart import CartStore
from storefront.config import Settings, get_settings
from storefront.logging import get_logger
from storefront.services.catalog_client import CatalogClient
from storefront.services.error_handler import ErrorHandler
from storefront.services.repositories import ProductRepository
from storefront.wishlist import WishlistStore

logger = get_logger(__name__)


class ShopSession:
    """
    Everything one shopper's session needs, wired together explicitly.

    The presentation layer receives this object; there are no module-level
    store singletons. Logging out empties the cart and the wishlist.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        catalog: Optional[ProductRepository] = None,
        cart: Optional[CartStore] = None,
        wishlist: Optional[WishlistStore] = None,
        auth: Optional[AuthSession] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.catalog = catalog or ProductRepository(CatalogClient(self.settings))
        self.cart = cart or CartStore()
        self.wishlist = wishlist or WishlistStore()
        self.auth = auth or AuthSession(ttl=timedelta(hours=self.settings.session_ttl_hours))
        self.error_handler = error_handler or ErrorHandler()

    def login(self, username: str, password: str) -> UserSession:
        return self.auth.login(username, password)

    def logout(self) -> None:
        self.auth.logout()
        self.cart.clear()
        self.wishlist.clear()

    def badges(self) -> dict:
        """Counts shown on navigation badges."""
        return {
            "cart": self.cart.item_count,
            "wishlist": self.wishlist.item_count,
        }

    async def aclose(self) -> None:
        await self.catalog.client.aclose()

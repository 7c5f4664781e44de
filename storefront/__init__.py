"""
Storefront - catalog browsing, cart and wishlist.

Product data comes from a public REST catalog; cart and wishlist are
in-memory stores owned by a ShopSession.
"""

__version__ = "1.0.0"

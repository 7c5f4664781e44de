"""
WebApp API Pydantic Models

Request bodies shared by the webapp routers.
"""
from pydantic import BaseModel


# ==================== AUTH MODELS ====================

class LoginRequest(BaseModel):
    username: str
    password: str


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    product_id: int
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    product_id: int
    quantity: int = 1  # 0 or less removes the line


class CartProductRequest(BaseModel):
    product_id: int


# ==================== WISHLIST MODELS ====================

class ToggleFavoriteRequest(BaseModel):
    product_id: int



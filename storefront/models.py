"""Catalog and user models - Pydantic, immutable once parsed."""
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from storefront.services.money import to_decimal as _to_decimal


class Product(BaseModel):
    """
    Catalog product as supplied by the catalog API.

    Stores hold references to these; nothing mutates them after parsing.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    title: str = "Unknown Product"
    price: Decimal = Decimal("0")
    category: str = "Unknown"
    image: Optional[str] = None
    rating: Decimal = Decimal("0")
    description: str = "No description available"
    thumbnail: str = ""
    brand: str = "Unknown Brand"
    stock: int = 0

    @field_validator("price", "rating", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("price")
    @classmethod
    def price_not_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("price must be non-negative")
        return v

    @field_validator("rating")
    @classmethod
    def rating_in_range(cls, v: Decimal) -> Decimal:
        if v < 0 or v > 5:
            raise ValueError("rating must be between 0 and 5")
        return v

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Product":
        """
        Parse a catalog payload.

        Keys that are missing or null fall back to the model defaults,
        except id: a record without one fails validation.
        """
        cleaned = {key: value for key, value in data.items() if value is not None}
        return cls.model_validate(cleaned)

    @property
    def display_image(self) -> str:
        """Image for listings: explicit image first, thumbnail otherwise."""
        return self.image or self.thumbnail

    def to_dict(self) -> dict:
        """JSON-safe representation for API responses."""
        return {
            "id": self.id,
            "title": self.title,
            "price": float(self.price),
            "category": self.category,
            "image": self.display_image or None,
            "rating": float(self.rating),
            "description": self.description,
            "brand": self.brand,
            "stock": self.stock,
        }


class User(BaseModel):
    """Signed-in user profile."""
    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    email: str = ""
    full_name: str = ""
    avatar: Optional[str] = None

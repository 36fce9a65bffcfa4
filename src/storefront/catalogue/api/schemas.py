"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class ProductRequest(BaseModel):
    """Body for both creating a product and replacing its fields."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Classic Black T-Shirt",
                    "description": "Premium cotton crew-neck tee in black.",
                    "price": 19.99,
                    "stock_quantity": 120,
                    "category": "apparel",
                    "images": ["https://cdn.example.com/tshirt-black-front.jpg"],
                    "active": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str | None = None
    price: float = Field(..., ge=0)
    stock_quantity: int = Field(0, ge=0)
    category: str | None = Field(None, max_length=100)
    images: list[str] = Field(default_factory=list)
    rating: float = Field(0.0, ge=0, le=5)
    active: bool = True


# --- Response Schemas ---


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: float
    stock_quantity: int
    category: str | None = None
    images: list[str]
    rating: float
    review_count: int
    active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductPageResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    size: int


class ProductIdResponse(BaseModel):
    product_id: str

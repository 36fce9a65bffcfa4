"""Pydantic request/response schemas for the Cart API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AddCartItemRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "quantity": 2,
                }
            ]
        }
    }

    product_id: str
    quantity: int = Field(1, ge=1)


class CartItemResponse(BaseModel):
    product_id: str
    product_name: str
    price: float
    image: str | None = None
    quantity: int


class CartResponse(BaseModel):
    user_id: str
    items: list[CartItemResponse]
    total_price: float

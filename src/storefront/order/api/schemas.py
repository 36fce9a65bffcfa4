"""Pydantic request/response schemas for the Order API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address_id": "addr-001",
                    "shipping_cost": 5.99,
                }
            ]
        }
    }

    shipping_address_id: str
    shipping_cost: float | None = Field(None, ge=0)


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    price: float
    quantity: int
    image: str | None = None


class ShippingAddressResponse(BaseModel):
    street: str
    city: str
    state: str | None = None
    zip_code: str
    country: str


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    items: list[OrderItemResponse]
    subtotal: float
    tax: float
    shipping_cost: float
    total: float
    shipping_address: ShippingAddressResponse | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderPageResponse(BaseModel):
    items: list[OrderResponse]
    total: int
    page: int
    size: int

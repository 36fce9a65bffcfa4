"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- User Request Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "first_name": "Jane",
                    "last_name": "Doe",
                }
            ]
        }
    }

    email: str = Field(..., max_length=254)
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)


class UpdateProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "first_name": "Janet",
                }
            ]
        }
    }

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


# --- Address Request Schemas ---


class AddAddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "street": "123 Main St",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62704",
                    "country": "US",
                    "is_default": False,
                }
            ]
        }
    }

    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)
    is_default: bool = False


# --- Response Schemas ---


class RegisteredUserResponse(BaseModel):
    user_id: str
    token: str


class UserResponse(BaseModel):
    user_id: str
    email: str
    first_name: str
    last_name: str
    roles: list[str]
    enabled: bool
    created_at: datetime | None = None


class AddressResponse(BaseModel):
    address_id: str
    street: str
    city: str
    state: str | None = None
    zip_code: str
    country: str
    is_default: bool


class AddressIdResponse(BaseModel):
    address_id: str


class StatusResponse(BaseModel):
    status: str = "ok"

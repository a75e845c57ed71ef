"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the Protean commands.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from storefront.payment.details import PaymentMethod


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane@example.com",
                    "password": "s3cret",
                }
            ]
        }
    }


class UserIdResponse(BaseModel):
    user_id: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str


class DeletedCountResponse(BaseModel):
    deleted: int


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductRequest(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    price: Decimal = Field(ge=0)
    stock_quantity: int = Field(ge=0)
    image_url: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: Decimal
    stock_quantity: int
    image_url: str | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddCartItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=1)


class CartItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str | None = None
    quantity: int
    price: Decimal
    subtotal: Decimal


class CartResponse(BaseModel):
    cart_id: str
    items: list[CartItemResponse]
    total_price: Decimal


class CartItemIdResponse(BaseModel):
    item_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    shipping_address: AddressSchema
    billing_address: AddressSchema
    payment_method: PaymentMethod

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "street": "1 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "postal_code": "62701",
                        "country": "US",
                    },
                    "billing_address": {
                        "street": "1 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "postal_code": "62701",
                        "country": "US",
                    },
                    "payment_method": "CREDIT_CARD",
                }
            ]
        }
    }


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class PaymentDetailsResponse(BaseModel):
    method: str
    status: str
    transaction_id: str | None = None
    settled_at: datetime | None = None
    billing_address: AddressSchema | None = None


class OrderResponse(BaseModel):
    id: str
    user_id: str
    items: list[OrderItemResponse]
    total_amount: Decimal
    created_at: datetime
    shipping_address: AddressSchema | None = None
    payment_details: PaymentDetailsResponse
    status: str

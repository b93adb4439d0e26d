"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Fields the domain validates itself (guest info,
shipping address parts) are optional here so the domain can report them in
its own order of precedence.
"""

from datetime import datetime

from pydantic import BaseModel, Field

# {product_id: {size: quantity}}; "default" is the size of sizeless products
CartItems = dict[str, dict[str, int]]


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ShippingAddressSchema(BaseModel):
    home_address: str | None = None
    city: str | None = None
    region_or_state: str | None = None
    country: str | None = None
    zip_code: str | None = None


class GuestInfoSchema(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartItemsRequest(BaseModel):
    cart_items: dict | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cart_items": {
                        "1": {"S": 2, "M": 1},
                        "7": {"default": 1},
                    }
                }
            ]
        }
    }


class CartResponse(BaseModel):
    cart_items: CartItems


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    cart_items: dict | None = None
    shipping_address: ShippingAddressSchema | None = None
    guest_info: GuestInfoSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cart_items": {"1": {"S": 2, "M": 1}},
                    "shipping_address": {
                        "home_address": "12 Independence Ave",
                        "city": "Accra",
                        "region_or_state": "Greater Accra",
                        "country": "Ghana",
                        "zip_code": "GA-100",
                    },
                    "guest_info": {
                        "name": "Ama Mensah",
                        "email": "ama@example.com",
                        "phone": "+233200000000",
                    },
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str


class UpdatePaymentStatusRequest(BaseModel):
    payment_status: str


class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    product_name: str | None = None
    size: str
    quantity: int = Field(ge=1)
    unit_price: float


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str | None = None
    guest_info: GuestInfoSchema | None = None
    shipping_address: ShippingAddressSchema
    total_amount: float
    status: str
    payment_status: str
    items: list[OrderItemResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderListResponse(BaseModel):
    count: int
    orders: list[OrderResponse]


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class ProductResponse(BaseModel):
    product_id: str
    name: str
    unit_price: float
    in_stock: bool
    category: str | None = None
    sizes: list[str] = Field(default_factory=list)

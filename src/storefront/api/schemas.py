"""Pydantic request/response schemas for the storefront API.

These are external contracts, kept separate from the Protean commands.
JSON uses camelCase keys; snake_case is accepted as well.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusResponse(ApiModel):
    status: str = "ok"


class IdResponse(ApiModel):
    id: str


# ---------------------------------------------------------------------------
# Checkout & tracking
# ---------------------------------------------------------------------------
class CartItemSchema(ApiModel):
    product_id: str
    variant_id: str | None = None
    quantity: int = Field(ge=1)


class CheckoutRequest(ApiModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254)
    phone: str = Field(min_length=1, max_length=30)
    address_line1: str = Field(min_length=1, max_length=255)
    address_line2: str | None = Field(default=None, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    postal_code: str | None = Field(default=None, max_length=20)
    country: str = Field(min_length=1, max_length=100)
    payment_method: Literal["stripe", "cod"]
    note: str | None = None
    discount_code: str | None = Field(default=None, max_length=50)
    recommendation_code: str | None = Field(default=None, max_length=20)
    items: list[CartItemSchema]

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "firstName": "Ada",
                    "lastName": "Lovelace",
                    "email": "ada@example.com",
                    "phone": "07700 900123",
                    "addressLine1": "1 Cat Street",
                    "city": "London",
                    "postalCode": "N1 1AA",
                    "country": "GB",
                    "paymentMethod": "cod",
                    "items": [{"productId": "prod-001", "quantity": 2}],
                }
            ]
        },
    )


class CheckoutResponse(ApiModel):
    order_number: str
    recommendation_code: str | None = None
    message: str | None = None


class TrackOrderRequest(ApiModel):
    order_number: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=1, max_length=254)


class AnalyticsTrackRequest(ApiModel):
    event: str = Field(min_length=1, max_length=50)
    path: str = Field(min_length=1, max_length=500)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
class LoginRequest(ApiModel):
    username: str | None = None
    password: str | None = None


class MeResponse(ApiModel):
    user_id: str
    username: str
    display_name: str


# ---------------------------------------------------------------------------
# Admin: catalogue
# ---------------------------------------------------------------------------
class CategoryRequest(ApiModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    sort_order: int | None = Field(default=None, ge=0)


class ProductImageSchema(ApiModel):
    url: str = Field(min_length=1, max_length=1000)
    alt_text: str | None = Field(default=None, max_length=255)
    sort_order: int | None = Field(default=None, ge=0)


class ProductOptionValueSchema(ApiModel):
    label: str = Field(min_length=1, max_length=50)
    color_hex: str | None = Field(default=None, max_length=7)
    sort_order: int | None = Field(default=None, ge=0)


class ProductOptionTypeSchema(ApiModel):
    name: str = Field(min_length=1, max_length=50)
    sort_order: int | None = Field(default=None, ge=0)
    values: list[ProductOptionValueSchema] = Field(default_factory=list)


class ProductVariantSchema(ApiModel):
    sku: str | None = Field(default=None, max_length=100)
    price_override: int | None = Field(default=None, ge=1)
    stock: int | None = Field(default=None, ge=0)
    image_url: str | None = Field(default=None, max_length=1000)
    options: dict[str, str] = Field(default_factory=dict)


class ProductRequest(ApiModel):
    title: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: int = Field(ge=1)
    compare_at_price: int | None = Field(default=None, ge=0)
    category_id: str | None = None
    status: Literal["active", "draft", "archived"] = "draft"
    tags: str | None = None
    stock: int | None = Field(default=None, ge=0)
    images: list[ProductImageSchema] = Field(default_factory=list)
    option_types: list[ProductOptionTypeSchema] = Field(default_factory=list)
    variants: list[ProductVariantSchema] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Admin: orders
# ---------------------------------------------------------------------------
class OrderStatusRequest(ApiModel):
    status: str = Field(min_length=1, max_length=30)
    note: str | None = None


class PaymentStatusRequest(ApiModel):
    payment_status: str = Field(min_length=1, max_length=30)
    note: str | None = None


class OrderNoteRequest(ApiModel):
    note: str | None = Field(default=None, max_length=1000)


class UnfulfilledCountResponse(ApiModel):
    count: int


# ---------------------------------------------------------------------------
# Admin: promotions
# ---------------------------------------------------------------------------
class DiscountCodeRequest(ApiModel):
    code: str = Field(min_length=1, max_length=50)
    type: Literal["percentage", "fixed"]
    value: int = Field(ge=1)
    max_uses: int | None = Field(default=None, ge=1)
    per_customer_limit: int = Field(default=1, ge=1)
    expires_at: datetime | None = None
    active: bool = True


class DiscountToggleRequest(ApiModel):
    active: bool


# ---------------------------------------------------------------------------
# Admin: theme, settings, users
# ---------------------------------------------------------------------------
class ThemeRequest(ApiModel):
    preset: str = Field(min_length=1, max_length=50)
    custom_overrides: dict[str, str] | None = None


class PaletteRequest(ApiModel):
    mode: Literal["text", "image"]
    prompt: str | None = Field(default=None, max_length=2000)
    image: str | None = None
    media_type: Literal["image/jpeg", "image/png", "image/webp", "image/gif"] = "image/jpeg"


class SettingRequest(ApiModel):
    key: str = Field(min_length=1, max_length=100)
    value: str


class AdminUserRequest(ApiModel):
    username: str = Field(max_length=50)
    email: str = Field(min_length=3, max_length=254)
    display_name: str = Field(min_length=1, max_length=100)
    password: str = Field(max_length=200)

"""Pydantic request schemas for the La Patisserie API."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

# --- Catalogue ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Brownies",
                    "description": "Fudgy, chewy and baked fresh every morning.",
                    "images": ["https://res.cloudinary.com/demo/brownies.jpg"],
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    description: str | None = Field(None, max_length=500)
    images: list[str] | None = None
    videos: list[str] | None = None


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)
    images: list[str] | None = None
    videos: list[str] | None = None
    is_active: bool | None = None


class VariantSchema(BaseModel):
    quantity: float = Field(..., ge=0)
    measuring_unit: str = "g"
    price: float = Field(..., ge=0)
    cost_price: float | None = Field(None, ge=0)
    discount_type: str | None = None
    discount_value: float | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    is_stock_active: bool | None = None


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Belgian Chocolate Brownie",
                    "category_id": "c1f7b7c2-6a55-4d0b-9a39-3f1b5b8f6c11",
                    "variants": [{"quantity": 1, "measuring_unit": "pcs", "price": 120}],
                    "is_veg": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=200)
    description: str | None = None
    category_id: str
    images: list[str] | None = None
    videos: list[str] | None = None
    tags: list[str] | None = None
    is_veg: bool | None = None
    has_egg: bool | None = None
    badge: str | None = Field(None, max_length=50)
    cancel_offer: bool | None = None
    variants: list[VariantSchema] = Field(..., min_length=1)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=200)
    description: str | None = None
    category_id: str | None = None
    images: list[str] | None = None
    videos: list[str] | None = None
    tags: list[str] | None = None
    variants: list[VariantSchema] | None = None
    is_veg: bool | None = None
    has_egg: bool | None = None
    badge: str | None = Field(None, max_length=50)
    cancel_offer: bool | None = None
    is_active: bool | None = None


# --- Banners ---


class CreateBannerRequest(BaseModel):
    title: str = Field(..., max_length=100)
    subtitle: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=500)
    media_type: str | None = None
    src: str = Field(..., max_length=1000)
    alt_text: str | None = Field(None, max_length=200)
    is_active: bool | None = None
    display_order: int | None = None
    features: list[str] | None = None
    media_metadata: dict | None = None


class UpdateBannerRequest(BaseModel):
    title: str | None = Field(None, max_length=100)
    subtitle: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=500)
    media_type: str | None = None
    src: str | None = Field(None, max_length=1000)
    alt_text: str | None = Field(None, max_length=200)
    is_active: bool | None = None
    display_order: int | None = None
    features: list[str] | None = None
    media_metadata: dict | None = None


class BannerPosition(BaseModel):
    id: str
    display_order: int


class ReorderBannersRequest(BaseModel):
    banners: list[BannerPosition] = Field(..., min_length=1)


# --- Newsletter ---


class SubscribeRequest(BaseModel):
    email: str | None = None
    source: str | None = None


class EmailRequest(BaseModel):
    email: str | None = None


class UpdateSubscriberRequest(BaseModel):
    email: str | None = None
    status: str | None = None


class SendNewsletterRequest(BaseModel):
    subject: str | None = None
    body: str | None = None


# --- Contact ---


class ContactRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha",
                    "email": "asha@example.com",
                    "subject": "Custom birthday cake",
                    "message": "Can you bake a 2 kg eggless cake for Saturday?",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    phone: str | None = Field(None, max_length=20)
    subject: str = Field(..., max_length=200)
    message: str


class UpdateContactRequest(BaseModel):
    status: str | None = None
    is_important: bool | None = None
    tags: list[str] | None = None


class ReplyContactRequest(BaseModel):
    reply: str | None = None
    mark_as_resolved: bool = False


class BulkContactsRequest(BaseModel):
    contact_ids: list[str] = Field(..., min_length=1)
    action: str
    status: str | None = None


# --- Donations ---


class UpdateDonationRequest(BaseModel):
    payment_status: str | None = None
    notes: str | None = None


# --- Cart ---


class AddToCartRequest(BaseModel):
    product_id: str
    variant_index: int = Field(0, ge=0)
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    variant_index: int = Field(0, ge=0)
    quantity: int = Field(..., ge=0)


# --- Orders ---


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "payment_method": "cod",
                    "delivery_location": "Peelamedu, Coimbatore",
                    "hostel_name": "Block A",
                    "donation_amount": 10,
                }
            ]
        }
    }

    payment_method: str
    delivery_location: str | None = Field(None, max_length=200)
    hostel_name: str | None = Field(None, max_length=100)
    location_id: str | None = None
    user_name: str | None = Field(None, max_length=100)
    user_phone: str | None = Field(None, max_length=20)
    donation_amount: float | None = Field(None, ge=0)


class VerifyPaymentRequest(BaseModel):
    order_number: str
    gateway_order_id: str
    gateway_payment_id: str
    signature: str


class CancelOrderRequest(BaseModel):
    reason: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str


class DispatchOrdersRequest(BaseModel):
    hostel_name: str
    category_name: str
    product_name: str
    count: int


# --- Shop schedule ---


class OpeningHoursSchema(BaseModel):
    start_time: str | None = None
    end_time: str | None = None
    is_active: bool | None = None


class PauseWindowSchema(BaseModel):
    start_time: str
    end_time: str
    description: str | None = None


class UpdateScheduleRequest(BaseModel):
    weekday: OpeningHoursSchema | None = None
    weekend: OpeningHoursSchema | None = None
    timezone: str | None = None
    pause_windows: list[PauseWindowSchema] | None = None


class SpecialDayRequest(BaseModel):
    date: date
    is_closed: bool | None = None
    start_time: str | None = None
    end_time: str | None = None
    description: str | None = Field(None, max_length=200)


# --- Locations ---


class CreateLocationRequest(BaseModel):
    city: str = Field(..., max_length=100)
    area: str = Field(..., max_length=100)
    pincode: str = Field(..., max_length=10)
    delivery_charge: float | None = Field(None, ge=0)


class UpdateLocationRequest(BaseModel):
    city: str | None = Field(None, max_length=100)
    area: str | None = Field(None, max_length=100)
    pincode: str | None = Field(None, max_length=10)
    delivery_charge: float | None = Field(None, ge=0)
    is_active: bool | None = None


class CreateHostelRequest(BaseModel):
    name: str = Field(..., max_length=100)
    location_id: str
    address: str | None = Field(None, max_length=255)


class UpdateHostelRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    location_id: str | None = None
    address: str | None = Field(None, max_length=255)


# --- Users ---


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=20)
    location_id: str | None = None
    hostel_name: str | None = Field(None, max_length=100)


class ChangeRoleRequest(BaseModel):
    role: str

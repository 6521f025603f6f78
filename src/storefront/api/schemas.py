"""Pydantic request/response schemas for the Storefront API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Shared Schemas ---


class CampaignRecord(BaseModel):
    """A campaign row as fetched from the data store."""

    id: str | int
    name: str | None = None
    code: str | None = None
    type: str
    discount_value: float
    target_type: str = "all"
    target_id: str | int | None = None
    is_active: bool = False
    end_date: str | None = None


class MenuItemRecord(BaseModel):
    id: str | int
    category: str | None = None


# --- Pricing Schemas ---


class PriceQuoteRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "base_price": "₹399",
                    "item": {"id": "margherita", "category": "Pizza"},
                    "campaigns": [
                        {
                            "id": "cmp-001",
                            "name": "Pizza Week",
                            "type": "percentage",
                            "discount_value": 10,
                            "target_type": "category",
                            "target_id": "Pizza",
                            "is_active": True,
                        }
                    ],
                }
            ]
        }
    }

    base_price: float | str
    item: MenuItemRecord
    campaigns: list[CampaignRecord] = Field(default_factory=list)


class PriceQuoteResponse(BaseModel):
    original: float | str
    discounted: float | str
    display_price: str
    has_discount: bool
    applied_campaign_id: str | None = None
    badge: str | None = None


# --- Coupon Schemas ---


class RedeemCouponRequest(BaseModel):
    total: float = Field(..., ge=0)
    code: str = Field(..., max_length=100)
    campaigns: list[CampaignRecord] = Field(default_factory=list)


class RedeemCouponResponse(BaseModel):
    discount_amount: int
    coupon_id: str
    coupon_code: str


# --- Cart Request Schemas ---


class AddCartItemRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "menu_item_id": "margherita",
                    "name": "Margherita",
                    "price": "359",
                    "base_price": "399",
                    "category": "Pizza",
                    "variant": "Large",
                }
            ]
        }
    }

    menu_item_id: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    price: str | int | float
    base_price: str | int | float | None = None
    category: str | None = Field(None, max_length=100)
    variant: str | None = Field(None, max_length=100)


class UpdateCartQuantityRequest(BaseModel):
    delta: int


class CheckoutRequest(BaseModel):
    coupon_code: str | None = Field(None, max_length=100)
    campaigns: list[CampaignRecord] = Field(default_factory=list)


# --- Cart Response Schemas ---


class CartLineResponse(BaseModel):
    id: str
    menu_item_id: str
    name: str
    category: str | None = None
    variant: str | None = None
    price: str
    base_price: str | None = None
    quantity: int
    subtotal: int


class CartResponse(BaseModel):
    session_id: str
    items: list[CartLineResponse]
    total: int
    item_count: int
    is_open: bool


class OrderLineResponse(BaseModel):
    name: str
    variant: str | None = None
    unit_price: int
    quantity: int
    subtotal: int


class CheckoutResponse(BaseModel):
    lines: list[OrderLineResponse]
    subtotal: int
    discount: int
    delivery_charge: int
    grand_total: int
    coupon_code: str | None = None

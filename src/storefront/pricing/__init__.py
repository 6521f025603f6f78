"""Pricing resolver — campaign-aware effective prices and coupon redemption."""

from storefront.pricing.campaign import Campaign, DiscountType, MenuItemRef, TargetType, load_campaigns
from storefront.pricing.coupons import CouponRedemption, CouponRejected, apply_coupon
from storefront.pricing.money import format_price, parse_price, price_text, unit_price_as_number
from storefront.pricing.resolver import PriceResolution, discount_label, resolve_effective_price

__all__ = [
    "Campaign",
    "CouponRedemption",
    "CouponRejected",
    "DiscountType",
    "MenuItemRef",
    "PriceResolution",
    "TargetType",
    "apply_coupon",
    "discount_label",
    "format_price",
    "load_campaigns",
    "parse_price",
    "price_text",
    "resolve_effective_price",
    "unit_price_as_number",
]

"""Storefront domain API package."""

from storefront.api.routes import cart_router, coupon_router, pricing_router

__all__ = ["cart_router", "coupon_router", "pricing_router"]

"""Storefront bounded context — menu pricing, coupons, and the session cart."""

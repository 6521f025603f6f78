"""Storefront bounded context — Campaign Pricing and Session Cart.

Resolves effective menu prices against promotional campaigns, redeems coupon
codes at checkout, and keeps a per-session cart that survives restarts.
"""

from protean.domain import Domain

from storefront.utils.logging import get_logger

storefront = Domain(name="storefront")

logger = get_logger(__name__)

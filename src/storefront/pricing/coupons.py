"""Coupon redemption against an order total.

Coupons are campaigns gated behind a code. Redemption only looks at the code
and the active flag; unlike automatic resolution it does not consult
``end_date``, so a coupon stays redeemable while it is active.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from storefront.pricing.campaign import Campaign, DiscountType
from storefront.pricing.money import round_half_up

INVALID_COUPON_MESSAGE = "Invalid or expired coupon code."


@dataclass(frozen=True)
class CouponRedemption:
    """A matched coupon and the whole-unit discount it grants.

    ``discount_amount`` is not clamped to the total it was computed from.
    """

    discount_amount: int
    coupon: Campaign

    @property
    def succeeded(self) -> bool:
        return True


@dataclass(frozen=True)
class CouponRejected:
    """A user-correctable redemption failure, shown inline next to the code field."""

    error: str = INVALID_COUPON_MESSAGE

    @property
    def succeeded(self) -> bool:
        return False


def find_coupon(code: str | None, campaigns: Iterable[Campaign]) -> Campaign | None:
    """First active campaign whose code matches ``code`` case-insensitively."""
    if not code:
        return None
    wanted = code.upper()
    return next((c for c in campaigns if c.code and c.code.upper() == wanted and c.is_active), None)


def apply_coupon(total: float, code: str | None, campaigns: Iterable[Campaign]) -> CouponRedemption | CouponRejected:
    """Discount granted by ``code`` on ``total``."""
    coupon = find_coupon(code, campaigns)
    if coupon is None:
        return CouponRejected()

    if coupon.discount_type == DiscountType.PERCENTAGE.value:
        amount = total * (coupon.discount_value / 100)
    else:
        amount = coupon.discount_value

    return CouponRedemption(discount_amount=round_half_up(amount), coupon=coupon)

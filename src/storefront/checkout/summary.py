"""Checkout summary — what the customer pays for the cart as it stands.

The coupon is applied to the cart subtotal here, at checkout time, and its
discount is clamped so the subtotal never goes below zero. The delivery charge
is added after the discount.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from storefront.cart.cart import Cart
from storefront.config import get_settings
from storefront.pricing.campaign import Campaign
from storefront.pricing.coupons import CouponRejected, apply_coupon


@dataclass(frozen=True)
class OrderLine:
    """A cart line as it will be recorded on the order."""

    name: str
    variant: str | None
    unit_price: int
    quantity: int
    subtotal: int


@dataclass(frozen=True)
class CheckoutSummary:
    lines: tuple[OrderLine, ...] = field(default_factory=tuple)
    subtotal: int = 0
    discount: int = 0
    delivery_charge: int = 0
    grand_total: int = 0
    coupon_code: str | None = None
    coupon_error: str | None = None

    @property
    def coupon_accepted(self) -> bool:
        return self.coupon_code is not None and self.coupon_error is None


def build_checkout_summary(
    cart: Cart,
    campaigns: Iterable[Campaign] = (),
    coupon_code: str | None = None,
    delivery_charge: int | None = None,
) -> CheckoutSummary:
    """Price the cart for checkout, optionally redeeming ``coupon_code``.

    A rejected coupon does not fail the summary: the discount stays at zero
    and the rejection message is carried in ``coupon_error``.
    """
    if delivery_charge is None:
        delivery_charge = get_settings().delivery_charge

    lines = tuple(
        OrderLine(
            name=item.name,
            variant=item.variant,
            unit_price=item.unit_price,
            quantity=item.quantity,
            subtotal=item.subtotal,
        )
        for item in cart.items
    )
    subtotal = cart.total

    discount = 0
    coupon_error = None
    if coupon_code:
        outcome = apply_coupon(subtotal, coupon_code, campaigns)
        if isinstance(outcome, CouponRejected):
            coupon_error = outcome.error
        else:
            discount = min(outcome.discount_amount, subtotal)

    return CheckoutSummary(
        lines=lines,
        subtotal=subtotal,
        discount=discount,
        delivery_charge=delivery_charge,
        grand_total=subtotal - discount + delivery_charge,
        coupon_code=coupon_code or None,
        coupon_error=coupon_error,
    )

"""Tests for building the checkout summary."""

import pytest
from storefront.cart.cart import Cart
from storefront.checkout.summary import build_checkout_summary
from storefront.pricing.coupons import INVALID_COUPON_MESSAGE


@pytest.fixture()
def cart():
    cart = Cart.create()
    for _ in range(2):
        cart.add_item(menu_item_id="margherita", name="Margherita", price="₹350", category="Pizza", variant="Large")
    cart.add_item(menu_item_id="coke", name="Coke", price="60", category="Drinks")
    return cart


class TestSummaryWithoutCoupon:
    def test_lines_and_totals(self, cart):
        summary = build_checkout_summary(cart, delivery_charge=30)
        assert summary.subtotal == 760
        assert summary.discount == 0
        assert summary.grand_total == 790
        assert summary.lines[0].unit_price == 350
        assert summary.lines[0].quantity == 2
        assert summary.lines[0].subtotal == 700
        assert summary.lines[0].variant == "Large"
        assert summary.coupon_code is None
        assert summary.coupon_accepted is False

    def test_delivery_charge_from_settings(self, cart, monkeypatch):
        from storefront.config import reset_settings

        monkeypatch.setenv("STOREFRONT_DELIVERY_CHARGE", "45")
        reset_settings()
        assert build_checkout_summary(cart).delivery_charge == 45

    def test_default_delivery_charge(self, cart):
        assert build_checkout_summary(cart).delivery_charge == 30


class TestSummaryWithCoupon:
    def test_percentage_coupon(self, cart, make_campaign):
        coupon = make_campaign(code="SAVE10")
        summary = build_checkout_summary(cart, [coupon], "save10", delivery_charge=30)
        assert summary.discount == 76
        assert summary.grand_total == 760 - 76 + 30
        assert summary.coupon_accepted is True

    def test_fixed_coupon_clamped_to_subtotal(self, cart, make_campaign):
        coupon = make_campaign(code="BIGDEAL", discount_type="fixed", discount_value=1000.0)
        summary = build_checkout_summary(cart, [coupon], "BIGDEAL", delivery_charge=30)
        assert summary.discount == 760
        assert summary.grand_total == 30

    def test_rejected_coupon_reported_without_discount(self, cart):
        summary = build_checkout_summary(cart, [], "BADCODE", delivery_charge=30)
        assert summary.discount == 0
        assert summary.coupon_error == INVALID_COUPON_MESSAGE
        assert summary.grand_total == 790
        assert summary.coupon_accepted is False

    def test_summary_does_not_change_cart(self, cart, make_campaign):
        build_checkout_summary(cart, [make_campaign(code="SAVE10")], "SAVE10")
        assert cart.total == 760
        assert len(cart.items) == 2

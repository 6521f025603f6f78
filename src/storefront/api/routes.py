"""FastAPI routes for the Storefront domain — pricing, coupons and session carts."""

from fastapi import APIRouter, HTTPException

from storefront.api.schemas import (
    AddCartItemRequest,
    CampaignRecord,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    CheckoutResponse,
    OrderLineResponse,
    PriceQuoteRequest,
    PriceQuoteResponse,
    RedeemCouponRequest,
    RedeemCouponResponse,
    UpdateCartQuantityRequest,
)
from storefront.cart.session import CartSession
from storefront.cart.storage import storage_for
from storefront.checkout.summary import build_checkout_summary
from storefront.config import get_settings
from storefront.pricing.campaign import MenuItemRef, load_campaigns
from storefront.pricing.coupons import CouponRejected, apply_coupon
from storefront.pricing.money import format_price
from storefront.pricing.resolver import discount_label, resolve_effective_price
from storefront.utils.logging import add_context


def _campaigns(records: list[CampaignRecord]):
    return load_campaigns(record.model_dump() for record in records)


def _open_session(session_id: str) -> CartSession:
    add_context(session_id=session_id)
    return CartSession(storage_for(session_id), session_id=session_id)


def _cart_response(session: CartSession) -> CartResponse:
    return CartResponse(
        session_id=session.session_id,
        items=[
            CartLineResponse(
                id=item.line_id,
                menu_item_id=str(item.menu_item_id),
                name=item.name,
                category=item.category,
                variant=item.variant,
                price=item.price,
                base_price=item.base_price,
                quantity=item.quantity,
                subtotal=item.subtotal,
            )
            for item in session.items
        ],
        total=session.total,
        item_count=session.cart.item_count,
        is_open=session.is_open,
    )


# ---------------------------------------------------------------------------
# Pricing Router
# ---------------------------------------------------------------------------
pricing_router = APIRouter(prefix="/pricing", tags=["pricing"])


@pricing_router.post("/quote", response_model=PriceQuoteResponse)
async def quote_price(body: PriceQuoteRequest) -> PriceQuoteResponse:
    settings = get_settings()
    item = MenuItemRef.from_record(body.item.model_dump())
    resolution = resolve_effective_price(body.base_price, item, _campaigns(body.campaigns))

    campaign = resolution.applied_campaign
    return PriceQuoteResponse(
        original=resolution.original,
        discounted=resolution.discounted,
        display_price=format_price(resolution.discounted, settings.currency_symbol),
        has_discount=resolution.has_discount,
        applied_campaign_id=campaign.campaign_id if campaign else None,
        badge=discount_label(campaign, settings.currency_symbol) if campaign else None,
    )


# ---------------------------------------------------------------------------
# Coupon Router
# ---------------------------------------------------------------------------
coupon_router = APIRouter(prefix="/coupons", tags=["coupons"])


@coupon_router.post("/redeem", response_model=RedeemCouponResponse)
async def redeem_coupon(body: RedeemCouponRequest) -> RedeemCouponResponse:
    outcome = apply_coupon(body.total, body.code, _campaigns(body.campaigns))
    if isinstance(outcome, CouponRejected):
        raise HTTPException(status_code=422, detail=outcome.error)

    return RedeemCouponResponse(
        discount_amount=outcome.discount_amount,
        coupon_id=outcome.coupon.campaign_id,
        coupon_code=outcome.coupon.code,
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/{session_id}", response_model=CartResponse)
async def get_cart(session_id: str) -> CartResponse:
    return _cart_response(_open_session(session_id))


@cart_router.post("/{session_id}/items", response_model=CartResponse)
async def add_cart_item(session_id: str, body: AddCartItemRequest) -> CartResponse:
    session = _open_session(session_id)
    session.add_item(
        menu_item_id=body.menu_item_id,
        name=body.name,
        price=body.price,
        base_price=body.base_price,
        category=body.category,
        variant=body.variant,
    )
    return _cart_response(session)


@cart_router.patch("/{session_id}/items/{line_id}", response_model=CartResponse)
async def update_cart_item_quantity(session_id: str, line_id: str, body: UpdateCartQuantityRequest) -> CartResponse:
    session = _open_session(session_id)
    session.update_quantity(line_id, body.delta)
    return _cart_response(session)


@cart_router.delete("/{session_id}/items/{line_id}", response_model=CartResponse)
async def remove_cart_item(session_id: str, line_id: str) -> CartResponse:
    session = _open_session(session_id)
    session.remove_item(line_id)
    return _cart_response(session)


@cart_router.delete("/{session_id}", response_model=CartResponse)
async def clear_cart(session_id: str) -> CartResponse:
    session = _open_session(session_id)
    session.clear_cart()
    return _cart_response(session)


@cart_router.post("/{session_id}/checkout", response_model=CheckoutResponse)
async def checkout_cart(session_id: str, body: CheckoutRequest) -> CheckoutResponse:
    """Price the cart for checkout and empty it.

    1. Build the summary (subtotal, coupon discount, delivery charge)
    2. Reject the request if the coupon was not accepted, leaving the cart as is
    3. Check the cart out
    """
    session = _open_session(session_id)
    if not session.items:
        raise HTTPException(status_code=422, detail="Cart is empty")

    summary = build_checkout_summary(session.cart, _campaigns(body.campaigns), body.coupon_code)
    if summary.coupon_error:
        raise HTTPException(status_code=422, detail=summary.coupon_error)

    session.complete_checkout()

    return CheckoutResponse(
        lines=[
            OrderLineResponse(
                name=line.name,
                variant=line.variant,
                unit_price=line.unit_price,
                quantity=line.quantity,
                subtotal=line.subtotal,
            )
            for line in summary.lines
        ],
        subtotal=summary.subtotal,
        discount=summary.discount,
        delivery_charge=summary.delivery_charge,
        grand_total=summary.grand_total,
        coupon_code=summary.coupon_code,
    )

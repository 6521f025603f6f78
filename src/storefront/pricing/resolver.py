"""Automatic price resolution against auto-applied campaigns.

``resolve_effective_price`` is pure: the only outside input is the clock used
to decide whether a campaign has passed its end date.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from storefront.pricing.campaign import Campaign, DiscountType, MenuItemRef
from storefront.pricing.money import format_price, parse_price, round_half_up


@dataclass(frozen=True)
class PriceResolution:
    """Outcome of resolving one item's price.

    ``original`` is the parsed base price at full precision (or the raw input
    when it could not be parsed), ``discounted`` the whole-unit price after the
    applied campaign.
    """

    original: float | int | str
    discounted: float | int | str
    applied_campaign: Campaign | None = None

    @property
    def has_discount(self) -> bool:
        return self.applied_campaign is not None and parse_price(self.original) != parse_price(self.discounted)


def _candidates(campaigns: Iterable[Campaign], now: datetime) -> list[Campaign]:
    eligible = [c for c in campaigns if c.is_eligible(now) and not c.is_coupon]
    return sorted(eligible, key=lambda c: (c.specificity, c.campaign_id))


def select_campaign(item: MenuItemRef, campaigns: Iterable[Campaign], now: datetime | None = None) -> Campaign | None:
    """Most specific eligible auto-applied campaign covering ``item``, if any.

    Scope decides precedence (item, then category, then all); campaigns of the
    same scope are ordered by id. The size of the discount plays no part.
    """
    now = now or datetime.now(UTC)
    return next((c for c in _candidates(campaigns, now) if c.applies_to(item)), None)


def resolve_effective_price(
    base_price,
    item: MenuItemRef,
    campaigns: Iterable[Campaign],
    now: datetime | None = None,
) -> PriceResolution:
    """Effective price of ``item`` under the current auto-applied campaigns.

    A base price that cannot be read as a number comes back untouched with no
    campaign applied.
    """
    price = parse_price(base_price)
    if price is None:
        return PriceResolution(original=base_price, discounted=base_price)

    match = select_campaign(item, campaigns, now)
    if match is None:
        return PriceResolution(original=price, discounted=price)

    return PriceResolution(
        original=price,
        discounted=round_half_up(match.discount_on(price)),
        applied_campaign=match,
    )


def discount_label(campaign: Campaign, currency_symbol: str = "₹") -> str:
    """Badge text for a discounted menu card, e.g. ``"10% OFF"`` or ``"₹30 OFF"``."""
    value = campaign.discount_value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if campaign.discount_type == DiscountType.PERCENTAGE.value:
        return f"{value}% OFF"
    return f"{format_price(value, currency_symbol)} OFF"

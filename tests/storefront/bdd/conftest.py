"""Shared BDD fixtures and step definitions for the Storefront domain."""

from datetime import UTC, datetime, timedelta

import pytest
from pytest_bdd import given, parsers, then
from storefront.cart.session import CartSession
from storefront.cart.storage.memory_adapter import InMemoryCartStorage
from storefront.pricing.campaign import Campaign


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def campaigns():
    """Campaigns in force for the scenario, in the order they were given."""
    return []


@pytest.fixture()
def storage():
    return InMemoryCartStorage(key="pizzaminos-cart")


def _add_campaign(campaigns, discount_type, value, target_type="all", target_id=None, code=None, end_date=None):
    campaigns.append(
        Campaign(
            campaign_id=f"cmp-{len(campaigns) + 1:03d}",
            name=f"Campaign {len(campaigns) + 1}",
            code=code,
            discount_type=discount_type,
            discount_value=float(value),
            target_type=target_type,
            target_id=target_id,
            is_active=True,
            end_date=end_date,
        )
    )


# ---------------------------------------------------------------------------
# Given steps — Campaigns
# ---------------------------------------------------------------------------
@given(parsers.cfparse("an active {discount_type} campaign of {value:d} on all items"))
def storewide_campaign(campaigns, discount_type, value):
    _add_campaign(campaigns, discount_type, value)


@given(parsers.cfparse('an active {discount_type} campaign of {value:d} on category "{category}"'))
def category_campaign(campaigns, discount_type, value, category):
    _add_campaign(campaigns, discount_type, value, target_type="category", target_id=category)


@given(parsers.cfparse('an active {discount_type} campaign of {value:d} on item "{item_id}"'))
def item_campaign(campaigns, discount_type, value, item_id):
    _add_campaign(campaigns, discount_type, value, target_type="item", target_id=item_id)


@given(parsers.cfparse('an active {discount_type} coupon "{code}" worth {value:d}'))
def coupon_campaign(campaigns, discount_type, code, value):
    _add_campaign(campaigns, discount_type, value, code=code)


@given(parsers.cfparse('an expired {discount_type} coupon "{code}" worth {value:d}'))
def expired_coupon_campaign(campaigns, discount_type, code, value):
    _add_campaign(campaigns, discount_type, value, code=code, end_date=datetime.now(UTC) - timedelta(days=1))


@given(parsers.cfparse("an expired {discount_type} campaign of {value:d} on all items"))
def expired_campaign(campaigns, discount_type, value):
    _add_campaign(campaigns, discount_type, value, end_date=datetime.now(UTC) - timedelta(days=1))


# ---------------------------------------------------------------------------
# Given steps — Session cart
# ---------------------------------------------------------------------------
@given("an empty session cart", target_fixture="session")
def empty_session(storage):
    return CartSession(storage, session_id="sess-001")


# ---------------------------------------------------------------------------
# Then steps — Session cart (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart total is {total:d}"))
def cart_total_is(session, total):
    assert session.total == total


@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines_singular(session, count):
    assert len(session.items) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(session, count):
    assert len(session.items) == count

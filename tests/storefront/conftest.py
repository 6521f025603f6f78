from datetime import UTC, datetime, timedelta

import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture()
def now():
    return datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def make_campaign():
    """Factory for Campaign value objects with sensible defaults."""
    from storefront.pricing.campaign import Campaign

    def _make(**overrides):
        values = {
            "campaign_id": "cmp-001",
            "name": "House Offer",
            "discount_type": "percentage",
            "discount_value": 10.0,
            "target_type": "all",
            "is_active": True,
        }
        values.update(overrides)
        return Campaign(**values)

    return _make


@pytest.fixture()
def past(now):
    return now - timedelta(days=1)


@pytest.fixture()
def future(now):
    return now + timedelta(days=1)

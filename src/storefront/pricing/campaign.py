"""Campaign and menu item value objects consumed by the pricing resolver.

Campaign records come from the hosted data store already deserialized. They
are read into immutable value objects here; nothing in this module writes or
reconciles campaigns.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String

from storefront.domain import logger, storefront


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class TargetType(Enum):
    ITEM = "item"
    CATEGORY = "category"
    ALL = "all"


# Lower sorts first: the most specific scope wins.
SCOPE_SPECIFICITY = {
    TargetType.ITEM.value: 0,
    TargetType.CATEGORY.value: 1,
    TargetType.ALL.value: 2,
}


def _parse_timestamp(value):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _optional_text(value):
    if value is None or value == "":
        return None
    return str(value)


@storefront.value_object
class MenuItemRef:
    """Identity and classification of a catalog item, as far as pricing needs it."""

    item_id = String(required=True, max_length=255)
    category = String(max_length=100)

    @classmethod
    def from_record(cls, record: Mapping) -> "MenuItemRef":
        return cls(item_id=str(record["id"]), category=_optional_text(record.get("category")))


@storefront.value_object
class Campaign:
    """A promotional rule: scope, discount formula and activity window.

    A campaign carrying a ``code`` is a coupon. Coupons are only reachable
    through explicit redemption and never take part in automatic pricing.
    Campaigns have no start date; they take effect as soon as they are active.
    """

    campaign_id = String(required=True, max_length=100)
    name = String(max_length=255)
    code = String(max_length=100)
    discount_type = String(required=True, choices=DiscountType)
    discount_value = Float(required=True, min_value=0.0)
    target_type = String(choices=TargetType, default=TargetType.ALL.value)
    target_id = String(max_length=255)
    is_active = Boolean(default=False)
    end_date = DateTime()

    @invariant.post
    def scoped_campaign_must_name_its_target(self):
        if self.target_type in (TargetType.CATEGORY.value, TargetType.ITEM.value) and not self.target_id:
            raise ValidationError({"target_id": [f"A {self.target_type} campaign needs a target_id"]})

    @invariant.post
    def percentage_must_not_exceed_one_hundred(self):
        if self.discount_type == DiscountType.PERCENTAGE.value and self.discount_value is not None:
            if self.discount_value > 100:
                raise ValidationError({"discount_value": ["Percentage discounts cannot exceed 100"]})

    @classmethod
    def from_record(cls, record: Mapping) -> "Campaign":
        """Build a campaign from a data-store row (``id``, ``type``, ISO ``end_date``)."""
        try:
            end_date = _parse_timestamp(record.get("end_date"))
        except ValueError as exc:
            raise ValidationError({"end_date": [f"Unreadable timestamp: {record.get('end_date')!r}"]}) from exc

        return cls(
            campaign_id=_optional_text(record.get("id")),
            name=_optional_text(record.get("name")),
            code=_optional_text(record.get("code")),
            discount_type=record.get("type"),
            discount_value=record.get("discount_value"),
            target_type=record.get("target_type") or TargetType.ALL.value,
            target_id=_optional_text(record.get("target_id")),
            is_active=bool(record.get("is_active", False)),
            end_date=end_date,
        )

    @property
    def is_coupon(self) -> bool:
        return bool(self.code)

    @property
    def specificity(self) -> int:
        return SCOPE_SPECIFICITY[self.target_type]

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.end_date is None:
            return False
        end_date = self.end_date if self.end_date.tzinfo else self.end_date.replace(tzinfo=UTC)
        return end_date <= (now or datetime.now(UTC))

    def is_eligible(self, now: datetime | None = None) -> bool:
        """Active and not past its end date."""
        return bool(self.is_active) and not self.is_expired(now)

    def applies_to(self, item: MenuItemRef) -> bool:
        if self.target_type == TargetType.ALL.value:
            return True
        if self.target_type == TargetType.CATEGORY.value:
            return self.target_id == item.category
        if self.target_type == TargetType.ITEM.value:
            return self.target_id == item.item_id
        return False

    def discount_on(self, amount: float) -> float:
        """Price left after applying this campaign's discount to ``amount``."""
        if self.discount_type == DiscountType.PERCENTAGE.value:
            return amount - amount * (self.discount_value / 100)
        return max(0.0, amount - self.discount_value)


def load_campaigns(records: Iterable[Mapping]) -> list[Campaign]:
    """Read campaign rows into value objects, skipping rows that do not validate."""
    campaigns = []
    for record in records:
        if isinstance(record, Campaign):
            campaigns.append(record)
            continue
        if not isinstance(record, Mapping):
            logger.warning("campaign_record_skipped", reason="not a mapping", record_type=type(record).__name__)
            continue
        try:
            campaigns.append(Campaign.from_record(record))
        except ValidationError as exc:
            logger.warning("campaign_record_skipped", campaign_id=record.get("id"), errors=str(exc))
    return campaigns

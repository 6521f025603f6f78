"""Cart aggregate — the session's priced line items and their derived total.

Each line captures the effective unit price it was added at. The total is
always recomputed from those captured prices, never re-resolved against the
campaigns in force now, so a cart keeps its time-of-add prices until it is
cleared and filled again.
"""

from protean.exceptions import ValidationError
from protean.fields import Boolean, HasMany, Identifier, Integer, String

from storefront.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from storefront.domain import logger, storefront
from storefront.pricing.money import price_text, unit_price_as_number


def line_identity(menu_item_id, variant=None) -> str:
    """Identity of a cart line: the menu item id, suffixed by the variant when there is one."""
    if variant:
        return f"{menu_item_id}-{variant}"
    return str(menu_item_id)


@storefront.entity(part_of="Cart")
class LineItem:
    line_id = String(identifier=True, required=True, max_length=255)
    menu_item_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    category = String(max_length=100)
    variant = String(max_length=100)
    price = String(required=True, max_length=255)
    base_price = String(max_length=255)
    quantity = Integer(required=True, min_value=1)

    @property
    def unit_price(self) -> int:
        return unit_price_as_number(self.price)

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity


@storefront.aggregate
class Cart:
    session_id = String(max_length=255)
    items = HasMany(LineItem)
    is_open = Boolean(default=False)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id=None):
        return cls(session_id=session_id, is_open=False)

    @classmethod
    def restore(cls, lines, session_id=None):
        """Rebuild a cart from snapshot lines without raising events.

        A line that fails validation is dropped on its own; the rest of the
        cart is kept.

        Args:
            lines: Dicts with line_id, menu_item_id, name, category, variant,
                   price, base_price and quantity, in display order.
        """
        cart = cls.create(session_id=session_id)
        for line in lines:
            try:
                item = LineItem(**line)
            except ValidationError as exc:
                logger.warning("cart_line_dropped", line_id=line.get("line_id"), errors=str(exc))
                continue
            cart.add_items(item)
        return cart

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_line(self, line_id):
        return next((i for i in self.items if i.line_id == str(line_id)), None)

    @property
    def total(self) -> int:
        return sum(item.subtotal for item in self.items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, menu_item_id, name, price, base_price=None, category=None, variant=None):
        """Add one unit of a menu item (or bump its existing line by one).

        An existing line keeps the prices it was first added at.
        """
        if not menu_item_id:
            raise ValidationError({"menu_item_id": ["A cart line needs a menu item id"]})

        line_id = line_identity(menu_item_id, variant)
        existing = self.find_line(line_id)

        if existing:
            existing.quantity += 1
            quantity = existing.quantity
        else:
            self.add_items(
                LineItem(
                    line_id=line_id,
                    menu_item_id=str(menu_item_id),
                    name=name,
                    category=category,
                    variant=variant or None,
                    price=price_text(price),
                    base_price=price_text(base_price) if base_price is not None else None,
                    quantity=1,
                )
            )
            quantity = 1

        self.is_open = True

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                line_id=line_id,
                menu_item_id=str(menu_item_id),
                variant=variant or None,
                quantity=quantity,
            )
        )

    def remove_item(self, line_id):
        """Drop a line from the cart. Unknown lines are ignored."""
        item = self.find_line(line_id)
        if item is None:
            return False

        self.remove_items(item)
        self.raise_(CartItemRemoved(cart_id=str(self.id), line_id=item.line_id))
        return True

    def update_quantity(self, line_id, delta):
        """Shift a line's quantity by ``delta``; at zero or below the line is removed."""
        item = self.find_line(line_id)
        if item is None:
            return False

        previous_quantity = item.quantity
        new_quantity = max(0, previous_quantity + int(delta))
        if new_quantity == 0:
            return self.remove_item(line_id)

        item.quantity = new_quantity
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                line_id=item.line_id,
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )
        return True

    def clear_cart(self):
        """Empty the cart. Clearing an empty cart does nothing."""
        lines = list(self.items)
        if not lines:
            return
        self._drop_lines(lines)
        self.raise_(CartCleared(cart_id=str(self.id), lines_removed=len(lines)))

    def toggle_cart(self):
        self.is_open = not self.is_open

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def check_out(self):
        """Hand the cart over as an order and empty it."""
        if not self.items:
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})

        line_count = len(self.items)
        total = self.total
        self._drop_lines(list(self.items))
        self.is_open = False

        self.raise_(CartCheckedOut(cart_id=str(self.id), line_count=line_count, total=total))

    def _drop_lines(self, lines):
        for item in lines:
            self.remove_items(item)

    # -------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------
    def line_snapshot(self):
        """Plain dicts for every line, in display order."""
        return [
            {
                "line_id": item.line_id,
                "menu_item_id": str(item.menu_item_id),
                "name": item.name,
                "category": item.category,
                "variant": item.variant,
                "price": item.price,
                "base_price": item.base_price,
                "quantity": item.quantity,
            }
            for item in self.items
        ]

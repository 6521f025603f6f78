"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A menu item was added to the cart, or its line was bumped by one."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = String(required=True)
    menu_item_id = Identifier(required=True)
    variant = String()
    quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartQuantityUpdated:
    """The quantity of a cart line was changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = String(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    """A line was dropped from the cart, explicitly or by reaching zero."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = String(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)
    lines_removed = Integer(required=True)


@storefront.event(part_of="Cart")
class CartCheckedOut:
    """The cart was handed over as an order and emptied."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_count = Integer(required=True)
    total = Integer(required=True)

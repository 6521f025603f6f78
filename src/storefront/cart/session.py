"""Session cart — a Cart aggregate bound to its storage slot.

A ``CartSession`` is what the UI layer talks to. It rehydrates the cart from
storage once, forwards each operation to the aggregate, and writes the whole
line collection back after every change to it. Storage trouble never reaches
the caller: an unreadable snapshot starts an empty cart, and a failed write is
logged and forgotten.
"""

from protean.exceptions import ValidationError

from storefront.cart.cart import Cart
from storefront.cart.snapshot import SnapshotError, decode_lines, encode_lines
from storefront.cart.storage.port import CartStorage
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartSession:
    """One browsing session's cart. Not thread-safe; owned by a single session."""

    def __init__(self, storage: CartStorage, session_id: str | None = None) -> None:
        self.storage = storage
        self.session_id = session_id
        self.cart = self._rehydrate()

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def _rehydrate(self) -> Cart:
        try:
            raw = self.storage.load()
        except Exception:
            logger.warning("cart_snapshot_load_failed", session_id=self.session_id, exc_info=True)
            return Cart.create(session_id=self.session_id)

        if raw is None:
            return Cart.create(session_id=self.session_id)

        try:
            cart = Cart.restore(decode_lines(raw), session_id=self.session_id)
        except (SnapshotError, ValidationError) as exc:
            logger.warning("cart_snapshot_unreadable", session_id=self.session_id, reason=str(exc))
            return Cart.create(session_id=self.session_id)

        logger.debug("cart_rehydrated", session_id=self.session_id, lines=len(cart.items))
        return cart

    def _persist(self) -> None:
        try:
            self.storage.save(encode_lines(self.cart.line_snapshot()))
        except Exception:
            logger.error("cart_persist_failed", session_id=self.session_id, exc_info=True)

    # -------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------
    @property
    def items(self):
        return list(self.cart.items)

    @property
    def total(self) -> int:
        return self.cart.total

    @property
    def is_open(self) -> bool:
        return bool(self.cart.is_open)

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    def add_item(self, menu_item_id, name, price, base_price=None, category=None, variant=None) -> None:
        self.cart.add_item(
            menu_item_id=menu_item_id,
            name=name,
            price=price,
            base_price=base_price,
            category=category,
            variant=variant,
        )
        logger.info("cart_item_added", session_id=self.session_id, menu_item_id=menu_item_id, variant=variant)
        self._persist()

    def remove_item(self, line_id) -> None:
        if self.cart.remove_item(line_id):
            self._persist()

    def update_quantity(self, line_id, delta: int) -> None:
        if self.cart.update_quantity(line_id, delta):
            self._persist()

    def clear_cart(self) -> None:
        self.cart.clear_cart()
        self._persist()

    def toggle_cart(self) -> None:
        self.cart.toggle_cart()

    def complete_checkout(self) -> None:
        """Empty the cart once its order has been placed."""
        total = self.cart.total
        self.cart.check_out()
        logger.info("cart_checked_out", session_id=self.session_id, total=total)
        self._persist()

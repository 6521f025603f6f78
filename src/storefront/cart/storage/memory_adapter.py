"""In-memory cart storage for development and testing.

Snapshots live in a dict shared by every adapter built on the same store, so a
new ``CartSession`` for a session id sees what an earlier one saved, the way a
browser tab sees local storage written by a previous visit.
"""

from storefront.cart.storage.port import CartStorage


class InMemoryCartStorage(CartStorage):
    """Cart storage backed by a plain dict."""

    def __init__(self, key: str = "cart", store: dict | None = None) -> None:
        self.key = key
        self.store: dict[str, str | bytes] = store if store is not None else {}
        self.saves: int = 0

    def load(self) -> str | bytes | None:
        return self.store.get(self.key)

    def save(self, data: str) -> None:
        self.store[self.key] = data
        self.saves += 1

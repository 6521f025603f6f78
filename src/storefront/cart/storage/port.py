"""Cart storage port (abstract interface).

The cart only needs somewhere to put one serialized snapshot per session and
read it back later. Adapters decide where that is: process memory for
development and tests, a JSON file per session for a single-node deployment.
"""

from abc import ABC, abstractmethod


class CartStorage(ABC):
    """Key-value slot holding one session's serialized cart."""

    @abstractmethod
    def load(self) -> str | bytes | None:
        """Return the last saved snapshot, or None if nothing was saved."""
        ...

    @abstractmethod
    def save(self, data: str) -> None:
        """Replace the stored snapshot with ``data``."""
        ...

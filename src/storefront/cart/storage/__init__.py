"""Cart storage factory.

Provides storage_for() / set_storage_factory() to swap implementations:
- InMemoryCartStorage for development and testing (default)
- FileCartStorage for a single-node deployment
"""

from collections.abc import Callable

from storefront.cart.storage.file_adapter import FileCartStorage
from storefront.cart.storage.memory_adapter import InMemoryCartStorage
from storefront.cart.storage.port import CartStorage
from storefront.config import get_settings

StorageFactory = Callable[[str], CartStorage]

_memory_store: dict = {}
_current_factory: StorageFactory | None = None


def memory_storage_factory(session_id: str) -> CartStorage:
    """Default factory: all sessions share one process-local dict."""
    return InMemoryCartStorage(key=f"{get_settings().cart_key}:{session_id}", store=_memory_store)


def file_storage_factory(session_id: str) -> CartStorage:
    """Factory writing one file per session under the configured cart directory."""
    settings = get_settings()
    return FileCartStorage(directory=settings.cart_dir, key=f"{settings.cart_key}-{session_id}")


def storage_for(session_id: str) -> CartStorage:
    """Return the storage slot for ``session_id`` from the active factory."""
    global _current_factory
    if _current_factory is None:
        _current_factory = memory_storage_factory
    return _current_factory(session_id)


def set_storage_factory(factory: StorageFactory) -> None:
    """Override the active storage factory (useful for tests)."""
    global _current_factory
    _current_factory = factory


def reset_storage_factory() -> None:
    """Reset to the default in-memory factory and forget stored carts."""
    global _current_factory
    _current_factory = None
    _memory_store.clear()


__all__ = [
    "CartStorage",
    "FileCartStorage",
    "InMemoryCartStorage",
    "file_storage_factory",
    "memory_storage_factory",
    "reset_storage_factory",
    "set_storage_factory",
    "storage_for",
]

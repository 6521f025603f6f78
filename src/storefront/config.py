"""Environment-driven settings for the storefront domain."""

import os
from dataclasses import dataclass

DEFAULT_CURRENCY_SYMBOL = "₹"
DEFAULT_DELIVERY_CHARGE = 30
DEFAULT_CART_DIR = ".carts"
DEFAULT_CART_KEY = "pizzaminos-cart"
DEFAULT_LOG_DIR = "logs"


@dataclass(frozen=True)
class Settings:
    environment: str
    currency_symbol: str
    delivery_charge: int
    cart_dir: str
    cart_key: str
    log_level: str | None = None
    log_dir: str | None = DEFAULT_LOG_DIR

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


_current_settings: Settings | None = None


def load_settings() -> Settings:
    """Build settings from the process environment."""
    return Settings(
        environment=os.getenv("PROTEAN_ENV", "development").lower(),
        currency_symbol=os.getenv("STOREFRONT_CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL),
        delivery_charge=int(os.getenv("STOREFRONT_DELIVERY_CHARGE", str(DEFAULT_DELIVERY_CHARGE))),
        cart_dir=os.getenv("STOREFRONT_CART_DIR", DEFAULT_CART_DIR),
        cart_key=os.getenv("STOREFRONT_CART_KEY", DEFAULT_CART_KEY),
        log_level=os.getenv("LOG_LEVEL") or None,
        log_dir=os.getenv("STOREFRONT_LOG_DIR", DEFAULT_LOG_DIR) or None,
    )


def get_settings() -> Settings:
    """Return the active settings, reading the environment on first use."""
    global _current_settings
    if _current_settings is None:
        _current_settings = load_settings()
    return _current_settings


def reset_settings() -> None:
    """Drop cached settings so the next call re-reads the environment."""
    global _current_settings
    _current_settings = None

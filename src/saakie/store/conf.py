"""Store configuration."""

from django.conf import settings


def get_config():
    """Get store configuration from settings."""
    defaults = {
        # Persisted cart slot
        "CART_SESSION_KEY": "saakie-cart",
        "CART_VERSION": 1,

        # Shipping (rupees)
        "SHIPPING_CHARGE": 100,
        "FREE_SHIPPING_THRESHOLD": 2999,

        # Catalog
        "ITEMS_PER_PAGE": 12,
        "MAX_PRICE": 10000,
        "LOW_STOCK_THRESHOLD": 5,
    }

    user_config = getattr(settings, "STORE", {})
    return {**defaults, **user_config}


def get_setting(name, default=None):
    """Get a specific store setting."""
    config = get_config()
    return config.get(name, default)

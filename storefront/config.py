"""
Configuration - environment driven settings.

Values are read once at import time. A local `.env` file is loaded
first so development setups do not need exported variables.
"""

import os
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()


# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Well-known slot name holding the serialized cart
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart")

# Checkout hand-off
CHECKOUT_CURRENCY = os.environ.get("CHECKOUT_CURRENCY", "eur")
SHIPPING_FEE = Decimal(os.environ.get("SHIPPING_FEE", "4.99"))
SHIPPING_LABEL = os.environ.get("SHIPPING_LABEL", "Frais de livraison")
SHIPPING_DESCRIPTION = os.environ.get("SHIPPING_DESCRIPTION", "Livraison standard")


def redis_configured() -> bool:
    """True when both Upstash credentials are present."""
    return bool(UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)

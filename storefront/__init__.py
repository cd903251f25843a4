"""
Storefront Cart Module

This package contains the customer-side cart components:
- cart: cart store, persisted slot, change notifications, badge
- pricing: customization surcharges, quantity discounts, unit prices
- checkout: plain-data hand-off to the external checkout call
- models: Pydantic schemas

Note: Imports are lazy so the Redis client is only built when a
store actually needs its persisted slot.
"""

__all__ = [
    "CartStore",
    "CartLineItem",
    "open_cart_session",
    "build_checkout_request",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name in ("CartStore", "open_cart_session"):
        from storefront.cart import store
        return getattr(store, name)
    if name == "CartLineItem":
        from storefront.cart.models import CartLineItem
        return CartLineItem
    if name == "build_checkout_request":
        from storefront.checkout import build_checkout_request
        return build_checkout_request
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

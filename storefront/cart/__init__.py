"""Cart package: line model, persisted slot, store, events and badge."""
from .models import CartLineItem
from .events import CartAction, CartChanged, CartEvents, CartSummary
from .storage import CartSlot
from .store import CartStore, open_cart_session
from .badge import CartBadge

__all__ = [
    "CartLineItem",
    "CartAction",
    "CartChanged",
    "CartEvents",
    "CartSummary",
    "CartSlot",
    "CartStore",
    "open_cart_session",
    "CartBadge",
]

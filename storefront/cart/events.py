"""
Cart change notifications.

Dependent views subscribe to a store's channel instead of re-reading
the persisted slot. Events are delivered synchronously, inside the
mutation that caused them.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Callable, List, Optional, Tuple

from storefront.logging import get_logger
from .models import CartLineItem

logger = get_logger(__name__)


class CartAction(str, Enum):
    LOADED = "loaded"
    ADDED = "added"
    MERGED = "merged"
    REMOVED = "removed"
    UPDATED = "updated"
    CLEARED = "cleared"


@dataclass(frozen=True)
class CartSummary:
    """Aggregates of the cart at one point in time."""
    item_count: int
    cart_count: int
    cart_total: Decimal
    items: Tuple[CartLineItem, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0

    def to_dict(self) -> dict:
        return {
            "is_empty": self.is_empty,
            "item_count": self.item_count,
            "cart_count": self.cart_count,
            "cart_total": float(self.cart_total),
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class CartChanged:
    """Emitted after every effective cart mutation."""
    action: CartAction
    summary: CartSummary
    line: Optional[CartLineItem] = None


CartListener = Callable[[CartChanged], None]


class CartEvents:
    """Synchronous fan-out of CartChanged events to subscribers."""

    def __init__(self):
        self._listeners: List[CartListener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: CartListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: CartChanged) -> None:
        # Iterate over a copy: listeners may unsubscribe while handling
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Cart listener failed on {event.action.value}: {e}", exc_info=True)

    def clear(self) -> None:
        self._listeners.clear()

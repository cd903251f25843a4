"""Cart badge - header counter fed by cart change events."""
from typing import Callable, Optional

from .events import CartChanged
from .store import CartStore


class CartBadge:
    """
    Read-only counter shown next to the cart icon.

    Displays the number of distinct lines and hides itself when the
    cart is empty. It follows the store through its change channel.
    """

    def __init__(self, store: CartStore):
        self.count = store.item_count
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self.on_cart_changed)

    @property
    def visible(self) -> bool:
        return self.count > 0

    @property
    def label(self) -> str:
        return str(self.count) if self.visible else ""

    def on_cart_changed(self, event: CartChanged) -> None:
        self.count = event.summary.item_count

    def close(self) -> None:
        """Detach from the store."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

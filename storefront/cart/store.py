"""
Cart Store - session-scoped cart state container.

Holds the authoritative list of cart lines for one session, mirrors it
to the persisted slot after every mutation and notifies subscribers.

Usage:
    with open_cart_session(session_id) as cart:
        cart.subscribe(badge.on_cart_changed)
        cart.add_to_cart(line)
        cart.cart_total
"""
from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, List, Optional, Tuple

from storefront.errors import CartClosedError, CartStorageError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.money import multiply
from .events import CartAction, CartChanged, CartEvents, CartListener, CartSummary
from .models import CartLineItem
from .storage import CartSlot

logger = get_logger(__name__)


class CartStore:
    """
    Manages one session's cart.

    All operations are synchronous. A persistence failure is logged and
    leaves `durable` False; the in-memory lines stay authoritative.
    """

    def __init__(
        self,
        slot: Optional[CartSlot] = None,
        *,
        client=None,
        session_id: Optional[str] = None,
    ):
        self._slot = slot or CartSlot(client=client, session_id=session_id)
        self._items: List[CartLineItem] = []
        self._closed = False
        self.events = CartEvents()
        self.durable = True
        self._items = self._load()

    # -------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------
    def _load(self) -> List[CartLineItem]:
        """Read the slot; anything missing or unparsable gives an empty cart."""
        try:
            records = self._slot.read()
        except CartStorageError as e:
            logger.warning(f"Cart storage unavailable, starting empty: {e}")
            self.durable = False
            return []
        except ValueError as e:
            self.durable = True
            logger.warning(f"Corrupted cart data in '{self._slot.key}': {e}")
            return []

        self.durable = True
        if records is None:
            return []

        try:
            items = [CartLineItem.from_dict(record) for record in records]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Malformed cart line in '{self._slot.key}': {e}")
            return []

        logger.debug(f"Loaded {len(items)} cart lines from '{self._slot.key}'")
        return items

    def reload(self) -> CartSummary:
        """Re-read the slot, e.g. after another writer changed it."""
        self._ensure_open()
        self._items = self._load()
        summary = self.snapshot()
        self.events.emit(CartChanged(CartAction.LOADED, summary))
        return summary

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_to_cart(self, item: CartLineItem) -> CartLineItem:
        """
        Add a line, or merge its quantity into the matching line.

        Returns:
            A copy of the resulting line
        """
        self._ensure_open()

        existing = next((line for line in self._items if line.same_line(item)), None)

        if existing:
            existing.quantity += item.quantity
            line, action = existing, CartAction.MERGED
        else:
            line = item.copy()
            self._items.append(line)
            action = CartAction.ADDED

        logger.info(
            f"Cart {action.value}: product {sanitize_id_for_logging(line.product_id)} "
            f"qty={line.quantity}"
        )
        self._commit(action, line)
        return line.copy()

    def remove_from_cart(
        self,
        product_id: str,
        size: Optional[str] = None,
        color: Optional[str] = None,
        customization_ref: Optional[str] = None,
    ) -> bool:
        """
        Remove the matching line.

        With `customization_ref`, only the customized line with that id is
        removed; otherwise only the uncustomized one. A miss is a no-op.

        Returns:
            True if a line was removed
        """
        self._ensure_open()

        removed = [line for line in self._items if line.matches(product_id, size, color, customization_ref)]
        if not removed:
            logger.debug(f"Remove skipped, no line for product {sanitize_id_for_logging(product_id)}")
            return False

        self._items = [
            line for line in self._items if not line.matches(product_id, size, color, customization_ref)
        ]
        self._persist()
        for line in removed:
            self._commit(CartAction.REMOVED, line, persist=False)
        return True

    def update_quantity(
        self,
        product_id: str,
        quantity: int,
        size: Optional[str] = None,
        color: Optional[str] = None,
        customization_ref: Optional[str] = None,
    ) -> bool:
        """
        Set the quantity of the matching line, clamped to at least 1.

        Returns:
            True if a line was updated
        """
        self._ensure_open()

        targets = [line for line in self._items if line.matches(product_id, size, color, customization_ref)]
        if not targets:
            logger.debug(f"Update skipped, no line for product {sanitize_id_for_logging(product_id)}")
            return False

        new_quantity = max(1, quantity)
        for line in targets:
            line.quantity = new_quantity
        self._persist()
        for line in targets:
            self._commit(CartAction.UPDATED, line, persist=False)
        return True

    def clear_cart(self) -> None:
        """Empty the cart and delete the persisted slot."""
        self._ensure_open()

        self._items = []
        try:
            self._slot.delete()
            self.durable = True
        except CartStorageError as e:
            self.durable = False
            logger.warning(f"Failed to delete cart slot, cleared in memory only: {e}")

        logger.info("Cart cleared")
        self._commit(CartAction.CLEARED, None, persist=False)

    # -------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------
    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        """Copies of the current lines, in insertion order."""
        return tuple(line.copy() for line in self._items)

    @property
    def item_count(self) -> int:
        """Number of distinct lines."""
        return len(self._items)

    @property
    def cart_count(self) -> int:
        """Total units across lines."""
        return sum(line.quantity for line in self._items)

    @property
    def cart_total(self) -> Decimal:
        return sum((multiply(line.unit_price, line.quantity) for line in self._items), Decimal("0"))

    def snapshot(self) -> CartSummary:
        return CartSummary(
            item_count=self.item_count,
            cart_count=self.cart_count,
            cart_total=self.cart_total,
            items=self.items,
        )

    # -------------------------------------------------------------------
    # Subscription & lifecycle
    # -------------------------------------------------------------------
    def subscribe(self, listener: CartListener):
        """Register a change listener; returns its unsubscribe callable."""
        self._ensure_open()
        return self.events.subscribe(listener)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear down the session: drop subscribers and refuse mutations."""
        if self._closed:
            return
        self.events.clear()
        self._closed = True
        logger.debug(f"Cart session on '{self._slot.key}' closed")

    def __enter__(self) -> "CartStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _ensure_open(self) -> None:
        if self._closed:
            raise CartClosedError()

    def _persist(self) -> None:
        try:
            self._slot.write([line.to_dict() for line in self._items])
            self.durable = True
        except CartStorageError as e:
            self.durable = False
            logger.warning(f"Cart not persisted, keeping in-memory state: {e}")

    def _commit(self, action: CartAction, line: Optional[CartLineItem], persist: bool = True) -> None:
        if persist:
            self._persist()
        self.events.emit(CartChanged(action, self.snapshot(), line.copy() if line else None))


@contextmanager
def open_cart_session(
    session_id: Optional[str] = None,
    *,
    client=None,
    slot: Optional[CartSlot] = None,
) -> Iterator[CartStore]:
    """Create a cart store for one session root and close it on exit."""
    store = CartStore(slot, client=client, session_id=session_id)
    try:
        yield store
    finally:
        store.close()

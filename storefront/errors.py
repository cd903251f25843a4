"""
Common Errors

Centralized error messages and the small exception hierarchy
used by the cart and checkout modules.
"""

# Storage errors
ERROR_STORAGE_UNAVAILABLE = "Cart storage unavailable"
ERROR_STORAGE_READ = "Failed to read cart from storage"
ERROR_STORAGE_WRITE = "Failed to write cart to storage"
ERROR_STORAGE_DELETE = "Failed to delete cart from storage"

# Cart errors
ERROR_CART_CLOSED = "Cart session is closed"
ERROR_CART_EMPTY = "Aucun article dans le panier"


class StorefrontError(Exception):
    """Base class for storefront errors."""


class CartStorageError(StorefrontError):
    """Raised by the persisted slot when the backing store fails."""

    def __init__(self, message: str = ERROR_STORAGE_UNAVAILABLE, key: str | None = None):
        self.key = key
        super().__init__(message if key is None else f"{message} (key={key})")


class CartClosedError(StorefrontError):
    """Raised when a closed cart session is mutated."""

    def __init__(self, message: str = ERROR_CART_CLOSED):
        super().__init__(message)


class EmptyCartError(StorefrontError):
    """Raised when checkout is requested for an empty cart."""

    def __init__(self, message: str = ERROR_CART_EMPTY):
        super().__init__(message)

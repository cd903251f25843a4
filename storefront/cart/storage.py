"""Persisted cart slot backed by the key-value store."""
import json
from typing import Any, List, Optional

from storefront.db import get_redis_sync, StorageKeys
from storefront.errors import (
    CartStorageError,
    ERROR_STORAGE_DELETE,
    ERROR_STORAGE_READ,
    ERROR_STORAGE_UNAVAILABLE,
    ERROR_STORAGE_WRITE,
)

__all__ = ["CartSlot", "StorageKeys"]


class CartSlot:
    """
    A single key holding the cart as a JSON array of line records.

    No TTL is set: the slot lives until it is deleted. Every backend
    failure surfaces as CartStorageError so the store can log it and
    carry on in memory.
    """

    def __init__(self, client=None, key: Optional[str] = None, session_id: Optional[str] = None):
        self._client = client  # Lazy initialization
        self.key = key or StorageKeys.cart_key(session_id)

    @property
    def client(self):
        """Get the key-value client (lazy initialization)."""
        if self._client is None:
            try:
                self._client = get_redis_sync()
            except ValueError as e:
                raise CartStorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}", key=self.key) from e
        return self._client

    def read_raw(self) -> Optional[str]:
        """Raw stored value, or None when the key is absent."""
        try:
            data = self.client.get(self.key)
        except CartStorageError:
            raise
        except Exception as e:
            raise CartStorageError(f"{ERROR_STORAGE_READ}: {e}", key=self.key) from e
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return data

    def read(self) -> Optional[List[Any]]:
        """
        Decoded line records.

        Returns:
            The stored list, or None when the key is absent

        Raises:
            CartStorageError: backend unavailable
            ValueError: stored value is not a JSON array
        """
        data = self.read_raw()
        if data is None:
            return None
        records = json.loads(data)
        if not isinstance(records, list):
            raise ValueError(f"expected a JSON array, got {type(records).__name__}")
        return records

    def write(self, records: List[dict]) -> None:
        try:
            payload = json.dumps(records)
            self.client.set(self.key, payload)
        except CartStorageError:
            raise
        except Exception as e:
            raise CartStorageError(f"{ERROR_STORAGE_WRITE}: {e}", key=self.key) from e

    def delete(self) -> None:
        """Remove the key entirely."""
        try:
            self.client.delete(self.key)
        except CartStorageError:
            raise
        except Exception as e:
            raise CartStorageError(f"{ERROR_STORAGE_DELETE}: {e}", key=self.key) from e

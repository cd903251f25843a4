"""
Storage Module - Upstash Redis client

Provides the sync Upstash Redis client backing the persisted cart slot.
Cart operations are synchronous, so only the sync client is exposed.
"""

from typing import Optional

from upstash_redis import Redis

from storefront import config


_redis_client: Optional[Redis] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not config.redis_configured():
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = Redis(url=config.UPSTASH_REDIS_REST_URL, token=config.UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class StorageKeys:
    """Key names for data kept in the key-value store."""

    CART = config.CART_STORAGE_KEY  # cart or cart:{session_id}

    @staticmethod
    def cart_key(session_id: Optional[str] = None) -> str:
        if not session_id:
            return StorageKeys.CART
        return f"{StorageKeys.CART}:{session_id}"

"""Pytest configuration and fixtures"""
import os
import pytest
from decimal import Decimal

# Set test environment variables
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from storefront.cart import CartLineItem, CartSlot, CartStore  # noqa: E402


class FakeRedis:
    """Dict-backed stand-in for the sync Upstash client (get/set/delete)."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})
        self.set_calls = 0
        self.delete_calls = 0

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.set_calls += 1
        self.data[key] = value
        return "OK"

    def delete(self, *keys):
        self.delete_calls += 1
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed


@pytest.fixture
def fake_redis():
    """Empty fake key-value store"""
    return FakeRedis()


@pytest.fixture
def cart_slot(fake_redis):
    """Cart slot on the well-known 'cart' key"""
    return CartSlot(client=fake_redis, key="cart")


@pytest.fixture
def cart_store(cart_slot):
    """Fresh cart store over an empty slot"""
    store = CartStore(cart_slot)
    yield store
    store.close()


@pytest.fixture
def make_line():
    """Factory for cart lines with sensible defaults"""
    def _make(**overrides):
        data = {
            "product_id": "P1",
            "name": "T-shirt Bio",
            "unit_price": Decimal("10"),
            "quantity": 1,
            "variant_id": "V-M-red",
            "image_url": "https://cdn.test/p1.jpg",
            "size": "M",
            "color": "red",
        }
        data.update(overrides)
        return CartLineItem(**data)

    return _make


@pytest.fixture
def sample_customization():
    """Front text placement in embroidery"""
    return {
        "productId": "P1",
        "customizations": [
            {
                "type_impression": "broderie",
                "position": "devant-pec",
                "type": "text",
                "texte": "Team Alpha",
                "couleur_texte": "blanc",
                "police": "Arial",
            }
        ],
    }

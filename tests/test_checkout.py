"""Tests for the checkout hand-off payload"""
import pytest
from decimal import Decimal

from storefront.checkout import build_checkout_request
from storefront.errors import EmptyCartError


@pytest.fixture
def filled_store(cart_store, make_line):
    cart_store.add_to_cart(make_line(unit_price="19.99", quantity=2))
    cart_store.add_to_cart(make_line(product_id="P2", name="Sweat", unit_price="30", size="L", color="noir", image_url=""))
    return cart_store


def test_empty_cart_is_rejected():
    """Test checkout of an empty cart"""
    with pytest.raises(EmptyCartError):
        build_checkout_request([])


def test_line_items_in_cents(filled_store):
    """Test payment lines carry unit amounts in minor units"""
    request = build_checkout_request(filled_store.items)

    first = request.line_items[0]
    assert first.quantity == 2
    assert first.price_data.unit_amount == 1999
    assert first.price_data.currency == "eur"
    assert first.price_data.product_data.name == "T-shirt Bio (M, red)"
    assert first.price_data.product_data.metadata["productId"] == "P1"


def test_missing_image_uses_placeholder(filled_store):
    """Test lines without image get the placeholder"""
    request = build_checkout_request(filled_store.items)

    assert request.line_items[1].price_data.product_data.images == ["/images/placeholder.jpg"]


def test_shipping_line_appended(filled_store):
    """Test the flat shipping fee is the last payment line"""
    request = build_checkout_request(filled_store.items)

    shipping = request.line_items[-1]
    assert len(request.line_items) == 3
    assert shipping.quantity == 1
    assert shipping.price_data.unit_amount == 499
    assert shipping.price_data.product_data.name == "Frais de livraison"


def test_totals_match_cart(filled_store):
    """Test subtotal equals the cart total and shipping is added once"""
    request = build_checkout_request(filled_store.items, user_id="user-123")

    assert request.subtotal == filled_store.cart_total
    assert request.subtotal == Decimal("69.98")
    assert request.shipping_fee == Decimal("4.99")
    assert request.total_amount == Decimal("74.97")
    assert not request.is_guest


def test_custom_fee_and_currency(filled_store):
    """Test overriding the fee and currency"""
    request = build_checkout_request(filled_store.items, shipping_fee=Decimal("0"), currency="chf")

    assert request.total_amount == Decimal("69.98")
    assert request.line_items[-1].price_data.unit_amount == 0
    assert request.currency == "chf"


def test_order_items_snapshot(filled_store):
    """Test order record items mirror the cart lines"""
    details = {"city": "Lyon", "country": "FR"}
    request = build_checkout_request(filled_store.items, shipping_details=details)

    assert request.is_guest
    assert request.shipping_details == details
    assert [item.product_id for item in request.order_items] == ["P1", "P2"]
    assert request.order_items[0].price == Decimal("19.99")
    assert request.order_items[0].variant_id == "V-M-red"
    assert request.order_items[1].quantity == 1


def test_checkout_does_not_touch_cart(filled_store, fake_redis):
    """Test building the request leaves the cart and slot unchanged"""
    writes = fake_redis.set_calls
    build_checkout_request(filled_store.items)

    assert filled_store.item_count == 2
    assert fake_redis.set_calls == writes


def test_display_name_skips_missing_attributes(make_line):
    """Test lines without size or color get a clean name"""
    lines = [
        make_line(size=None, color=None),
        make_line(product_id="P2", size="L", color=None),
    ]
    request = build_checkout_request(lines)

    assert request.line_items[0].price_data.product_data.name == "T-shirt Bio"
    assert request.line_items[1].price_data.product_data.name == "T-shirt Bio (L)"

"""
Tests for the cart line model
"""

import pytest
from decimal import Decimal
from storefront.cart import CartLineItem
from storefront.models import ShippingType, ProductCustomization


class TestCartLineItem:
    """Tests for CartLineItem dataclass."""

    def test_create_line_generates_id(self, make_line):
        """Test that a line without id gets one derived from product and variant."""
        line = make_line()

        assert line.id.startswith("P1-V-M-red-")
        assert line.unit_price == Decimal("10")

    def test_ids_are_unique(self, make_line):
        """Test two lines created back to back get distinct ids."""
        assert make_line().id != make_line().id

    def test_float_price_is_normalized(self, make_line):
        """Test a float price keeps its printed precision."""
        line = make_line(unit_price=19.99)

        assert line.unit_price == Decimal("19.99")

    def test_line_total(self, make_line):
        """Test total price for quantity."""
        line = make_line(unit_price="12.50", quantity=3)

        assert line.line_total == Decimal("37.50")

    def test_shipping_type_from_string(self, make_line):
        """Test shipping type is coerced to the enum."""
        line = make_line(shipping_type="urgent")

        assert line.shipping_type is ShippingType.URGENT

    def test_invalid_shipping_type(self, make_line):
        """Test an unknown shipping type is rejected."""
        with pytest.raises(ValueError):
            make_line(shipping_type="teleport")

    def test_pydantic_customization_is_dumped(self, make_line, sample_customization):
        """Test a ProductCustomization model is stored as a plain payload."""
        payload = ProductCustomization.model_validate(sample_customization)
        line = make_line(customization=payload)

        assert isinstance(line.customization, dict)
        assert line.customization["customizations"][0]["type_impression"] == "broderie"
        assert line.customization["customizations"][0]["texte"] == "Team Alpha"


class TestLineIdentity:
    """Tests for merge and target matching rules."""

    def test_same_line_without_customization(self, make_line):
        """Test product, size and color decide identity."""
        assert make_line().same_line(make_line(quantity=4, variant_id="other"))

    @pytest.mark.parametrize("field,value", [
        ("product_id", "P2"),
        ("size", "L"),
        ("color", "blue"),
    ])
    def test_different_attributes_are_distinct(self, make_line, field, value):
        """Test any differing attribute makes a distinct line."""
        assert not make_line().same_line(make_line(**{field: value}))

    def test_customized_lines_never_match(self, make_line, sample_customization):
        """Test even identical payloads do not merge."""
        first = make_line(customization=sample_customization)
        second = make_line(customization=dict(sample_customization))

        assert not first.same_line(second)
        assert not first.same_line(make_line())
        assert not make_line().same_line(first)

    def test_empty_payload_counts_as_customized(self, make_line):
        """Test presence, not content, drives identity."""
        assert make_line(customization={}).is_customized

    def test_matches_plain_line(self, make_line):
        """Test targeting an uncustomized line."""
        line = make_line()

        assert line.matches("P1", "M", "red")
        assert not line.matches("P1", "M", "red", customization_ref=line.id)
        assert not line.matches("P1", "L", "red")

    def test_matches_customized_line_by_reference(self, make_line, sample_customization):
        """Test a customized line is only reachable through its reference."""
        line = make_line(customization=sample_customization)

        assert line.matches("P1", "M", "red", customization_ref=line.id)
        assert not line.matches("P1", "M", "red")
        assert not line.matches("P1", "M", "red", customization_ref="someone-else")


class TestLineSerialization:
    """Tests for the stored JSON record."""

    def test_to_dict_uses_storefront_keys(self, make_line):
        """Test serialization to the slot record shape."""
        data = make_line(shipping_type="fast").to_dict()

        assert data["productId"] == "P1"
        assert data["variantId"] == "V-M-red"
        assert data["price"] == "10"
        assert data["imageUrl"] == "https://cdn.test/p1.jpg"
        assert data["shippingType"] == "fast"
        assert data["customization"] is None

    def test_from_dict_accepts_numeric_price(self):
        """Test records written with a numeric price load."""
        line = CartLineItem.from_dict({
            "id": "line-1",
            "productId": "P1",
            "name": "Sweat",
            "price": 24.9,
            "quantity": "2",
            "size": "L",
            "color": "noir",
            "imageUrl": "",
        })

        assert line.id == "line-1"
        assert line.unit_price == Decimal("24.9")
        assert line.quantity == 2
        assert line.variant_id is None

    def test_round_trip(self, make_line, sample_customization):
        """Test a record reloads to an equal line."""
        line = make_line(customization=sample_customization, shipping_type="normal", quantity=3)

        assert CartLineItem.from_dict(line.to_dict()) == line

    @pytest.mark.parametrize("price", ["abc", None, "NaN", True])
    def test_from_dict_rejects_bad_price(self, price):
        """Test an unreadable price is rejected instead of becoming zero."""
        with pytest.raises(ValueError):
            CartLineItem.from_dict({"productId": "P1", "name": "x", "price": price, "quantity": 1})

    def test_customization_is_made_json_safe(self, make_line):
        """Test non-JSON values in the payload are normalized."""
        line = make_line(customization={"surcharge": Decimal("15"), "tags": ("a", "b")})

        assert line.customization == {"surcharge": "15", "tags": ["a", "b"]}

    def test_from_dict_missing_product(self):
        """Test a record without product id is rejected."""
        with pytest.raises(KeyError):
            CartLineItem.from_dict({"name": "x", "price": "1", "quantity": 1})

    def test_from_dict_not_an_object(self):
        """Test a non-object record is rejected."""
        with pytest.raises(TypeError):
            CartLineItem.from_dict(["P1", 1])

    def test_copy_is_independent(self, make_line, sample_customization):
        """Test copies do not share the customization payload."""
        line = make_line(customization=sample_customization)
        clone = line.copy()
        clone.customization["customizations"].append({"type": "image"})
        clone.quantity = 9

        assert len(line.customization["customizations"]) == 1
        assert line.quantity == 1

"""Quantity discounts and unit price composition."""
from decimal import Decimal
from typing import Union

from storefront.services.money import Number, divide, multiply, round_money, subtract, to_decimal
from .customization import CustomizationLike, is_customization_complete, total_customization_surcharge

# (minimum units across all sizes, discount percent), highest first
QUANTITY_DISCOUNT_TIERS = (
    (50, Decimal("15")),
    (25, Decimal("10")),
    (10, Decimal("5")),
)


def quantity_discount(total_quantity: int) -> Decimal:
    """Discount percent earned by ordering `total_quantity` units of a product."""
    for minimum, percent in QUANTITY_DISCOUNT_TIERS:
        if total_quantity >= minimum:
            return percent
    return Decimal("0")


def discounted_base_price(base_price: Number, total_quantity: int) -> Decimal:
    percent = quantity_discount(total_quantity)
    if percent <= 0:
        return to_decimal(base_price)
    multiplier = subtract(Decimal("1"), divide(percent, Decimal("100")))
    return multiply(base_price, multiplier)


def compute_unit_price(
    base_price: Number,
    total_quantity: int,
    price_adjustment: Union[Number, None] = None,
    customization: CustomizationLike = None,
) -> Decimal:
    """
    Unit price to freeze into a cart line.

    Args:
        base_price: Catalog price of the product
        total_quantity: Units selected across all sizes (drives the discount)
        price_adjustment: Variant price adjustment (e.g. XXL)
        customization: Placements; only charged when complete

    Returns:
        Discounted base + adjustment + surcharge, rounded to cents
    """
    price = discounted_base_price(base_price, total_quantity) + to_decimal(price_adjustment)
    if customization is not None and is_customization_complete(customization):
        price += total_customization_surcharge(customization)
    return round_money(price)

"""Pricing helpers used to build a line's unit price before it enters the cart."""
from .customization import (
    customization_surcharge,
    total_customization_surcharge,
    is_customization_complete,
    describe_customization,
)
from .discounts import quantity_discount, discounted_base_price, compute_unit_price

__all__ = [
    "customization_surcharge",
    "total_customization_surcharge",
    "is_customization_complete",
    "describe_customization",
    "quantity_discount",
    "discounted_base_price",
    "compute_unit_price",
]

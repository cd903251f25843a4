"""
Checkout hand-off.

Turns the cart's current lines into the plain data handed to the
external checkout call: payment line items in minor units plus a
flat shipping line, and the item snapshot for the pending order
record. Nothing here talks to the payment processor.
"""
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from storefront import config
from storefront.cart.models import CartLineItem
from storefront.errors import EmptyCartError
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.models import (
    CheckoutLineItem,
    CheckoutRequest,
    OrderItem,
    PriceData,
    ProductData,
)
from storefront.services.money import multiply, round_money, to_cents

logger = get_logger(__name__)

PLACEHOLDER_IMAGE = "/images/placeholder.jpg"


def _display_name(line: CartLineItem) -> str:
    details = ", ".join(part for part in (line.size, line.color) if part)
    return f"{line.name} ({details})" if details else line.name


def build_line_item(line: CartLineItem, currency: str) -> CheckoutLineItem:
    """Payment line for one cart line; unit amount in cents, half up."""
    return CheckoutLineItem(
        price_data=PriceData(
            currency=currency,
            unit_amount=to_cents(line.unit_price),
            product_data=ProductData(
                name=_display_name(line),
                images=[line.image_url or PLACEHOLDER_IMAGE],
                metadata={
                    "productId": line.product_id,
                    "variantId": line.variant_id,
                    "size": line.size,
                    "color": line.color,
                },
            ),
        ),
        quantity=line.quantity,
    )


def build_shipping_line(fee: Decimal, currency: str) -> CheckoutLineItem:
    return CheckoutLineItem(
        price_data=PriceData(
            currency=currency,
            unit_amount=to_cents(fee),
            product_data=ProductData(
                name=config.SHIPPING_LABEL,
                description=config.SHIPPING_DESCRIPTION,
            ),
        ),
        quantity=1,
    )


def build_order_item(line: CartLineItem) -> OrderItem:
    return OrderItem(
        product_id=line.product_id,
        variant_id=line.variant_id,
        quantity=line.quantity,
        size=line.size,
        color=line.color,
        price=line.unit_price,
    )


def build_checkout_request(
    lines: Iterable[CartLineItem],
    user_id: Optional[str] = None,
    shipping_details: Optional[Dict[str, Any]] = None,
    shipping_fee: Optional[Decimal] = None,
    currency: Optional[str] = None,
) -> CheckoutRequest:
    """
    Build the checkout request for the given cart lines.

    Args:
        lines: Current cart lines (e.g. `store.items`)
        user_id: Signed-in customer, None for guests
        shipping_details: Address block forwarded untouched
        shipping_fee: Flat fee, defaults to SHIPPING_FEE
        currency: Currency code, defaults to CHECKOUT_CURRENCY

    Returns:
        CheckoutRequest ready to be sent by the checkout collaborator

    Raises:
        EmptyCartError: no lines to check out
    """
    lines = list(lines)
    if not lines:
        raise EmptyCartError()

    currency = currency or config.CHECKOUT_CURRENCY
    fee = round_money(config.SHIPPING_FEE if shipping_fee is None else shipping_fee)

    subtotal = round_money(
        sum((multiply(line.unit_price, line.quantity) for line in lines), Decimal("0"))
    )

    line_items = [build_line_item(line, currency) for line in lines]
    line_items.append(build_shipping_line(fee, currency))

    request = CheckoutRequest(
        user_id=user_id,
        currency=currency,
        line_items=line_items,
        order_items=[build_order_item(line) for line in lines],
        subtotal=subtotal,
        shipping_fee=fee,
        total_amount=subtotal + fee,
        shipping_details=shipping_details,
    )

    logger.info(
        f"Checkout request built for {sanitize_id_for_logging(user_id) if user_id else 'guest'}: "
        f"{len(lines)} lines, total={request.total_amount}"
    )
    return request

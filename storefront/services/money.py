"""
Money Utilities - Safe Decimal operations for monetary values.

Avoids float precision issues by using Decimal throughout.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "CHF": "CHF",
}


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Floats go through str to keep the printed precision
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def to_cents(value: Number) -> int:
    """
    Convert decimal amount to minor units (cents).

    Used for payment APIs that expect integer minor units.

    Args:
        value: Amount in major units (e.g., 12.50 EUR)

    Returns:
        Amount in minor units (e.g., 1250)
    """
    decimal_value = to_decimal(value)
    return int((decimal_value * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    """Convert minor units back to a Decimal amount."""
    return Decimal(cents) / Decimal(100)


def round_money(value: Number) -> Decimal:
    """Round monetary value to cents, half up."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def format_money(value: Number, currency: str = "EUR") -> str:
    """
    Format monetary value with currency symbol.

    Args:
        value: Value to format
        currency: Currency code (EUR, USD, ...)

    Returns:
        Formatted string, e.g. "12.50 €" or "$12.50"
    """
    currency = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    formatted = f"{round_money(value):,.2f}"

    if currency in ("USD", "GBP"):
        return f"{symbol}{formatted}"
    return f"{formatted} {symbol}"


def subtract(a: Number, b: Number) -> Decimal:
    """Safe subtraction of monetary values."""
    return to_decimal(a) - to_decimal(b)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def divide(value: Number, divisor: Number) -> Decimal:
    """Safe division of monetary value."""
    d = to_decimal(divisor)
    if d == 0:
        return Decimal("0")
    return to_decimal(value) / d

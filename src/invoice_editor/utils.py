"""
Utility functions for invoice input parsing and formatting.

Provides helpers for:
- Clamping raw form input into valid quantities and prices
- Parsing tax rates (invalid input reported as None)
- Currency formatting
"""

import math

MIN_QUANTITY = 1
MIN_UNIT_PRICE = 0.0

NumericInput = str | int | float | None


def parse_number(value: NumericInput) -> float | None:
    """
    Parse a raw input value into a finite float.

    Args:
        value: Text from a form field, a number, or None.

    Returns:
        The parsed float, or None for empty, non-numeric, NaN or
        infinite input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_quantity(value: NumericInput) -> int:
    """
    Parse a line item quantity, clamping invalid input to the minimum.

    Decimal input is truncated toward zero ("2.9" becomes 2) before the
    lower bound is applied.

    Args:
        value: Raw quantity input.

    Returns:
        An integer quantity of at least MIN_QUANTITY.
    """
    number = parse_number(value)
    if number is None:
        return MIN_QUANTITY
    return max(int(number), MIN_QUANTITY)


def parse_unit_price(value: NumericInput) -> float:
    """
    Parse a unit price, clamping invalid or negative input to zero.

    Args:
        value: Raw price input.

    Returns:
        A non-negative float.
    """
    number = parse_number(value)
    if number is None or number < MIN_UNIT_PRICE:
        return MIN_UNIT_PRICE
    return number


def parse_tax_rate(value: NumericInput) -> float | None:
    """
    Parse a tax rate percentage.

    Args:
        value: Raw tax rate input (18 means 18%).

    Returns:
        The non-negative rate, or None when the input is not acceptable.
    """
    number = parse_number(value)
    if number is None or number < 0:
        return None
    return number


def format_currency(value: float, currency: str = "USD") -> str:
    """
    Format a currency amount with the currency code prefix.

    Args:
        value: Numeric amount to format.
        currency: Currency code (e.g., 'USD', 'INR').

    Returns:
        Formatted string like 'USD 1,234.56'.
    """
    return f"{currency} {value:,.2f}"

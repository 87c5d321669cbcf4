"""
Display Formatting

Amounts are stored as plain numbers; the currency symbol and Indian
digit grouping (12,34,567.89) are applied only when rendering.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union


DEFAULT_CURRENCY_SYMBOL = "₹"

Number = Union[int, float, Decimal]


def group_indian(integer_digits: str) -> str:
    """
    Group digits the Indian way: last three, then pairs.

    >>> group_indian("10000000")
    '1,00,00,000'
    """
    if len(integer_digits) <= 3:
        return integer_digits
    head, tail = integer_digits[:-3], integer_digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_amount(value: Number) -> str:
    """Two decimals with Indian grouping, no symbol."""
    quantized = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    integer_part, fraction = f"{abs(quantized):.2f}".split(".")
    return f"{sign}{group_indian(integer_part)}.{fraction}"


def format_currency(value: Number, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """
    Render an amount for display.

    >>> format_currency(100000)
    '₹1,00,000.00'
    >>> format_currency(-2500.5)
    '-₹2,500.50'
    """
    amount = format_amount(value)
    if amount.startswith("-"):
        return f"-{symbol}{amount[1:]}"
    return f"{symbol}{amount}"

"""Currency coercion helpers.

Menu prices arrive either as bare numbers or as display strings such as
``"₹199"``. These helpers turn both into numbers without raising: a value that
cannot be read yields ``None`` (or ``0`` for cart unit prices) and the caller
decides how to degrade.
"""

import math
import re

_NON_NUMERIC = re.compile(r"[^\d.-]")
_NON_DIGIT = re.compile(r"[^0-9]")
_LEADING_NUMBER = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")


def parse_price(value):
    """Read a price as a float, or return ``None`` when it is not numeric.

    Strings keep only digits, ``-`` and ``.``; the longest leading number of
    what remains is used, so ``"₹1,299.50"`` reads as ``1299.5`` and
    ``"12.5.3"`` as ``12.5``.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", value))
        if match is None:
            return None
        number = float(match.group(0))
    else:
        return None

    if math.isnan(number):
        return None
    return number


def unit_price_as_number(value) -> int:
    """Integer unit price used for cart totals.

    Every non-digit character is dropped before parsing, so ``"₹199"`` and
    ``199`` both give ``199``. Nothing left to parse gives ``0``.
    """
    digits = _NON_DIGIT.sub("", str(value))
    return int(digits) if digits else 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer currency unit, halves rounding up."""
    return math.floor(value + 0.5)


def format_price(amount, currency_symbol: str = "₹") -> str:
    """Display form of a price, e.g. ``format_price(180) == "₹180"``."""
    if isinstance(amount, float) and amount.is_integer():
        amount = int(amount)
    return f"{currency_symbol}{amount}"


def price_text(value) -> str:
    """Text form of a price as it is captured on a cart line.

    Whole-number floats lose their fractional part (``199.0`` becomes
    ``"199"``) so that ``unit_price_as_number`` reads them back unchanged.
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)

"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()

    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]

    text = re.sub(r"[$€£¥]", "", text)
    text = text.replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    return -amount if is_negative else amount


def parse_rate(rate_str: str) -> Decimal:
    """Parse a tax rate given as a fraction ("0.2") or a percentage ("20%").

    Raises:
        ValueError: If the rate cannot be parsed
    """
    text = rate_str.strip()
    if text.endswith("%"):
        return parse_amount(text[:-1]) / Decimal("100")
    return parse_amount(text)


def coerce_decimal(value) -> Decimal:
    """Convert a stored or user-supplied number to Decimal.

    Floats go through ``str`` so 0.1 becomes Decimal("0.1") rather than its
    binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def fits_places(value: Decimal, places: int) -> bool:
    """Return True if value has no more than ``places`` decimal places.

    Trailing zeros don't count: Decimal("1.500") fits two places.
    """
    if not value.is_finite():
        return False
    if value.as_tuple().exponent >= -places:
        return True
    return value == value.quantize(Decimal(1).scaleb(-places))

"""
Money Formatting Utilities

Standardized decimal conversion and string formatting for monetary values,
so that JSON responses carry exact 2-decimal strings instead of floats.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


def to_decimal(value):
    """
    Convert a number-like value to Decimal without binary float drift.

    Floats are routed through str() so that 3.49 becomes Decimal('3.49')
    rather than Decimal('3.4900000000000002131628...').

    Raises:
        InvalidOperation: if the value is not a finite number
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise InvalidOperation(f'Not a number: {value!r}')
    else:
        result = Decimal(str(value).strip())
    if not result.is_finite():
        raise InvalidOperation(f'Not a finite number: {value!r}')
    return result


def round_places(value, places):
    """Round half-up to a fixed number of decimal places, matching a Numeric column's scale."""
    return to_decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_money(value):
    """Round to cents using round-half-up."""
    return round_places(value, 2)


def cost_to_string(value):
    """
    Convert a cost value to a 2-decimal string.

    Examples:
        >>> cost_to_string(Decimal("12.345"))
        '12.35'
        >>> cost_to_string(None)
        '0.00'
    """
    if value is None:
        return '0.00'
    return str(round_money(value))


def unit_price_to_string(value):
    """Per-unit prices are small, so keep 4 decimal places."""
    if value is None:
        return '0.0000'
    return str(round_places(value, 4))


def quantity_to_string(value):
    """Format a quantity without trailing zeros or exponent ('500', '0.25')."""
    if value is None:
        return None
    return format(to_decimal(value).normalize(), 'f')

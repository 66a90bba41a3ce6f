"""
Input Validation Service

Strict parsers for request payload fields. Unlike a form handler that
falls back to defaults, every helper here raises ValidationError so the
request is rejected before any database work starts.
"""

from decimal import InvalidOperation

from constants import VALID_MEASUREMENT_TYPES
from utils.money import to_decimal, round_places
from utils.sanitizer import sanitize_text
from .errors import ValidationError


def is_missing(value):
    """None, empty/whitespace strings and zero count as missing."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False


def require_fields(data, fields):
    """Raise ValidationError listing every missing required field."""
    missing = [f for f in fields if is_missing(data.get(f))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def clean_text(value, field, max_length, required=True):
    """Sanitize a text field; required fields must be non-empty afterwards."""
    if value is not None and not isinstance(value, str):
        raise ValidationError(f'{field} must be a string')
    text = sanitize_text(value, max_length=max_length)
    if required and not text:
        raise ValidationError(f'{field} is required')
    return text or None


def parse_decimal(value, field, min_val=None, allow_equal=True, places=None, below=None):
    """
    Parse a decimal amount.

    Args:
        value: Raw JSON value (number or numeric string)
        field: Field name used in the error message
        min_val: Lower bound, inclusive unless allow_equal is False
        places: Round half-up to this many decimal places (the column's scale)
            before the bounds are checked, so the value stored is the value used
        below: Exclusive upper bound
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    try:
        result = to_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f'{field} must be a number')
    if places is not None:
        result = round_places(result, places)
    if min_val is not None:
        if result < min_val or (not allow_equal and result == min_val):
            op = '>=' if allow_equal else '>'
            raise ValidationError(f'{field} must be {op} {min_val}')
    if below is not None and result >= below:
        raise ValidationError(f'{field} must be less than {below}')
    return result


def parse_positive_int(value, field):
    """Parse a strictly positive integer; integral floats like 2.0 are accepted."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f'{field} must be a positive integer')
    try:
        number = to_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f'{field} must be a positive integer')
    if number != number.to_integral_value() or number <= 0:
        raise ValidationError(f'{field} must be a positive integer')
    return int(number)


def parse_measurement_type(value, field='measurement_type'):
    code = str(value or '').strip().lower()
    if code not in VALID_MEASUREMENT_TYPES:
        raise ValidationError(f'Invalid {field}: {value}')
    return code


def require_list(value, field):
    """Require a non-empty JSON array."""
    if not isinstance(value, list) or not value:
        raise ValidationError(f'{field} must be a non-empty list')
    return value

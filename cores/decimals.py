from decimal import Decimal, InvalidOperation

from .exceptions import InvalidInputError

TWO_PLACES = Decimal("0.01")

# DECIMAL(5, 2) columns hold at most 999.99
MAX_STORED_DECIMAL = Decimal("999.99")


def to_fixed_decimal(value, field="value"):
    """
    Convert ``value`` to a two-place ``Decimal`` without silent rounding.

    Floats go through ``str`` first so ``8.5`` becomes ``Decimal("8.50")``
    rather than its binary expansion. Values with more than two decimal
    places, outside DECIMAL(5, 2) or not numeric raise ``InvalidInputError``.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(f"{field} must be a number")
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidInputError(f"{field} must be a number")

    if not number.is_finite():
        raise InvalidInputError(f"{field} must be a finite number")
    if abs(number) > MAX_STORED_DECIMAL:
        raise InvalidInputError(f"{field} must not exceed {MAX_STORED_DECIMAL}")
    quantized = number.quantize(TWO_PLACES)
    if quantized != number:
        raise InvalidInputError(f"{field} allows at most two decimal places")
    return quantized

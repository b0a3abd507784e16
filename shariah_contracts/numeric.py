"""Decimal conversion and rounding helpers shared by all calculators."""

from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation
from typing import Any

from shariah_contracts.exceptions import InvalidNumericInputError

HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")
TWOPLACES = Decimal("0.01")
WHOLE = Decimal("1")
MAX_WHOLE_DIGITS = 9


def to_decimal(value: Any, field_name: str) -> Decimal:
    """Convert a stored numeric value to ``Decimal``.

    Floats go through ``str`` so ``0.1`` stays ``Decimal("0.1")``.

    Raises
    ------
    InvalidNumericInputError
        If the value is absent, boolean, non-numeric or not finite.
    """
    if value is None:
        raise InvalidNumericInputError(field_name, "is required")
    if isinstance(value, bool):
        raise InvalidNumericInputError(field_name, "must be a number, not a boolean")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidNumericInputError(field_name, f"is not a number: {value!r}") from e
    else:
        raise InvalidNumericInputError(field_name, f"is not a number: {value!r}")

    if not result.is_finite():
        raise InvalidNumericInputError(field_name, "must be finite")
    return result


def to_int(value: Any, field_name: str) -> int:
    """Convert a stored whole-number value (e.g. months) to ``int``."""
    number = to_decimal(value, field_name)
    if number != number.to_integral_value():
        raise InvalidNumericInputError(field_name, f"must be a whole number, got {value!r}")
    if number.adjusted() >= MAX_WHOLE_DIGITS:
        raise InvalidNumericInputError(field_name, f"is too large, got {value!r}")
    return int(number)


def require_positive(value: Any, field_name: str) -> Decimal:
    """Return ``value`` as a Decimal, rejecting zero and negatives."""
    number = to_decimal(value, field_name)
    if number <= 0:
        raise InvalidNumericInputError(field_name, f"must be positive, got {number}")
    return number


def require_non_negative(value: Any, field_name: str) -> Decimal:
    """Return ``value`` as a Decimal, rejecting negatives."""
    number = to_decimal(value, field_name)
    if number < 0:
        raise InvalidNumericInputError(field_name, f"must not be negative, got {number}")
    return number


def require_percentage(value: Any, field_name: str) -> Decimal:
    """Return ``value`` as a Decimal percentage in [0, 100]."""
    number = require_non_negative(value, field_name)
    if number > HUNDRED:
        raise InvalidNumericInputError(field_name, f"must not exceed 100, got {number}")
    return number


def require_months(value: Any, field_name: str = "duration") -> int:
    """Return a positive whole number of months."""
    months = to_int(value, field_name)
    if months <= 0:
        raise InvalidNumericInputError(field_name, f"must be positive, got {months}")
    return months


def round_percent(value: Decimal) -> Decimal:
    """Round a percentage to two decimal places."""
    return value.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def round_money(value: Decimal) -> Decimal:
    """Round a currency amount to two decimal places."""
    return value.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def round_whole(value: Decimal) -> Decimal:
    """Round a currency amount to whole units."""
    return value.quantize(WHOLE, rounding=ROUND_HALF_UP)


def sums_to_hundred(first: Decimal, second: Decimal, tolerance: Decimal) -> bool:
    """True if two percentages form a 100% split within ``tolerance``."""
    return abs(first + second - HUNDRED) <= tolerance


def numeric_error_detail(error: Exception) -> str:
    """Failure detail for an input guard error or a Decimal context error.

    Finite inputs can still be too large or too small to compute with at
    the context precision (quantizing past 28 digits, exceeding Emax).
    """
    if isinstance(error, DecimalException):
        return f"amounts are outside the computable range ({type(error).__name__})"
    return str(error)

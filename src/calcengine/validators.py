"""Input validation functions with strict type checking."""

import math
from typing import TypeVar

from calcengine.exceptions import InvalidInputError

T = TypeVar("T", int, float)


def validate_number(value: T) -> T:
    """
    Validate that a value is a finite number.

    Args:
        value: The value to validate

    Returns:
        The validated value

    Raises:
        InvalidInputError: If value is NaN, Inf, or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(value, f"Expected number, got {type(value).__name__}")

    if isinstance(value, float):
        if math.isnan(value):
            raise InvalidInputError(value, "NaN is not allowed")
        if math.isinf(value):
            raise InvalidInputError(value, "Infinity is not allowed")

    return value


def validate_digit(value: int) -> int:
    """
    Validate that a value is a single decimal digit.

    Raises:
        InvalidInputError: If value is not an int in 0..9
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(value, f"Expected digit, got {type(value).__name__}")

    if not 0 <= value <= 9:
        raise InvalidInputError(value, "Digit must be between 0 and 9")

    return value


def count_digits(text: str) -> int:
    """Number of digit characters in an operand literal."""
    return sum(1 for ch in text if ch.isdigit())

"""Conversion between numeric values and bounded display strings."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import TYPE_CHECKING

from calcengine.exceptions import InvalidInputError
from calcengine.state import ErrorKind
from calcengine.validators import validate_number

if TYPE_CHECKING:
    from calcengine.state import CalculatorState

# Constants for the display
SIGNIFICANT_DIGITS = 15
MAX_FRACTION_DIGITS = 15
EXPONENT_THRESHOLD = 1e15

ERROR_TEXT = "Error"
ERROR_MESSAGES = {
    ErrorKind.DIVISION_BY_ZERO: "Cannot divide by zero",
    ErrorKind.OVERFLOW: "Overflow",
}

_FRACTION_QUANTUM = Decimal(1).scaleb(-MAX_FRACTION_DIGITS)


@dataclass(frozen=True)
class Display:
    """What a front end shows after each action."""

    text: str
    has_error: bool = False
    error_message: str | None = None


def format_number(value: float) -> str:
    """
    Render a number for the display.

    The value is rounded to SIGNIFICANT_DIGITS significant digits and
    trailing zeros are trimmed. Magnitudes at or above EXPONENT_THRESHOLD
    use a compact exponential form such as ``1.5e+20``; anything smaller is
    written in fixed point with at most MAX_FRACTION_DIGITS decimals, so a
    value too small to show becomes ``"0"``.

    Properties:
        - Idempotent: format_number(parse_number(s)) == s for any output s
        - Never returns "-0"

    Raises:
        InvalidInputError: If value is NaN, Inf, or not a number
    """
    validate_number(value)

    rounded = Decimal(f"{value:.{SIGNIFICANT_DIGITS}g}")
    if abs(rounded) >= EXPONENT_THRESHOLD:
        return _format_exponential(value)

    # Only small magnitudes carry more decimals than the display allows
    if rounded.as_tuple().exponent < -MAX_FRACTION_DIGITS:
        rounded = rounded.quantize(_FRACTION_QUANTUM, rounding=ROUND_HALF_EVEN)

    if rounded == 0:
        return "0"

    return f"{rounded.normalize():f}"


def _format_exponential(value: float) -> str:
    mantissa, exponent = f"{value:.{SIGNIFICANT_DIGITS - 1}e}".split("e")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return f"{mantissa}e{int(exponent):+d}"


def parse_number(text: str) -> float:
    """
    Read back a string produced by format_number or typed on the keypad.

    Accepts an optional leading minus, a trailing decimal point ("0.") and
    exponential text. Not meant for arbitrary user text.

    Raises:
        InvalidInputError: If text is not a finite decimal number
    """
    if not isinstance(text, str):
        raise InvalidInputError(text, f"Expected string, got {type(text).__name__}")

    try:
        parsed = Decimal(text.strip())
    except InvalidOperation as e:
        raise InvalidInputError(text, "Not a number") from e

    if not parsed.is_finite():
        raise InvalidInputError(text, "Not a finite number")

    return float(parsed)


def render(state: CalculatorState) -> Display:
    """Build the display for a state."""
    if state.error is not None:
        return Display(
            text=ERROR_TEXT,
            has_error=True,
            error_message=ERROR_MESSAGES[state.error],
        )

    return Display(text=state.operand_text)

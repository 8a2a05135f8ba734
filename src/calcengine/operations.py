"""Core arithmetic operations with overflow protection."""

from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING

from calcengine.exceptions import DivisionByZeroError, OverflowError
from calcengine.validators import validate_number

if TYPE_CHECKING:
    from collections.abc import Callable

# Results at or beyond this magnitude put the calculator into an overflow error
OVERFLOW_THRESHOLD = 1e100


def _check_overflow(result: float, operation: str, a: float, b: float) -> float:
    if math.isinf(result) or abs(result) >= OVERFLOW_THRESHOLD:
        raise OverflowError(operation, a, b)
    return result


def add(a: float, b: float) -> float:
    """
    Add two numbers with overflow protection.

    Properties:
        - Commutative: add(a, b) == add(b, a)
        - Identity: add(a, 0) == a

    Raises:
        InvalidInputError: If inputs are invalid
        OverflowError: If the result reaches OVERFLOW_THRESHOLD
    """
    validate_number(a)
    validate_number(b)

    return _check_overflow(a + b, "addition", a, b)


def subtract(a: float, b: float) -> float:
    """
    Subtract b from a with overflow protection.

    Properties:
        - Anti-commutative: subtract(a, b) == -subtract(b, a)
        - Self-inverse: subtract(a, a) == 0

    Raises:
        InvalidInputError: If inputs are invalid
        OverflowError: If the result reaches OVERFLOW_THRESHOLD
    """
    validate_number(a)
    validate_number(b)

    return _check_overflow(a - b, "subtraction", a, b)


def multiply(a: float, b: float) -> float:
    """
    Multiply two numbers with overflow protection.

    Properties:
        - Commutative: multiply(a, b) == multiply(b, a)
        - Identity: multiply(a, 1) == a
        - Zero: multiply(a, 0) == 0

    Raises:
        InvalidInputError: If inputs are invalid
        OverflowError: If the result reaches OVERFLOW_THRESHOLD
    """
    validate_number(a)
    validate_number(b)

    # Check for potential overflow before computing
    if a != 0 and b != 0 and abs(a) >= OVERFLOW_THRESHOLD / abs(b):
        raise OverflowError("multiplication", a, b)

    return _check_overflow(a * b, "multiplication", a, b)


def divide(a: float, b: float) -> float:
    """
    Divide a by b with zero and overflow protection.

    Properties:
        - Identity: divide(a, 1) == a
        - Self-division: divide(a, a) == 1 (for a != 0)

    Raises:
        InvalidInputError: If inputs are invalid
        DivisionByZeroError: If b is zero
        OverflowError: If the result reaches OVERFLOW_THRESHOLD
    """
    validate_number(a)
    validate_number(b)

    if b == 0:
        raise DivisionByZeroError(a)

    return _check_overflow(a / b, "division", a, b)


class OperatorKind(Enum):
    """The four binary operators a keypad offers, keyed by their symbol."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def symbol(self) -> str:
        return self.value

    def apply(self, a: float, b: float) -> float:
        """Evaluate ``a <op> b``, raising on division by zero or overflow."""
        return _FUNCTIONS[self](a, b)


_FUNCTIONS: dict[OperatorKind, Callable[[float, float], float]] = {
    OperatorKind.ADD: add,
    OperatorKind.SUB: subtract,
    OperatorKind.MUL: multiply,
    OperatorKind.DIV: divide,
}

"""Immutable calculator state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from calcengine.operations import OperatorKind


class ErrorKind(str, Enum):
    """Sticky error conditions; only AllClear leaves them."""

    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    OVERFLOW = "OVERFLOW"


@dataclass(frozen=True)
class LastOperation:
    """The operator and right operand of the last Equals, for repeat-equals."""

    operator: OperatorKind
    operand: float


@dataclass(frozen=True)
class CalculatorState:
    """
    Everything the calculator remembers between two key presses.

    ``current_operand`` is the unsigned text being typed or the last result;
    its sign lives in ``is_negative``. ``awaiting_operand`` is true right
    after an operator, equals or clear entry, when the next digit starts a
    fresh operand instead of appending.
    """

    current_operand: str = "0"
    is_negative: bool = False
    accumulator: float | None = None
    pending_operator: OperatorKind | None = None
    awaiting_operand: bool = False
    last_operation: LastOperation | None = None
    error: ErrorKind | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def operand_text(self) -> str:
        """The operand with its sign, as shown on the display."""
        if self.is_negative:
            return f"-{self.current_operand}"
        return self.current_operand

    def __str__(self) -> str:
        if self.error is not None:
            return f"error({self.error.value})"
        if self.pending_operator is not None:
            return f"{self.accumulator} {self.pending_operator.symbol} [{self.operand_text}]"
        return f"[{self.operand_text}]"

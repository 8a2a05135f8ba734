"""The calculator state machine."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from calcengine.actions import (
    Action,
    AllClear,
    ClearEntry,
    Decimal,
    Digit,
    Equals,
    Operator,
    Percent,
    ToggleSign,
)
from calcengine.exceptions import DivisionByZeroError, OverflowError
from calcengine.formatter import SIGNIFICANT_DIGITS, format_number, parse_number
from calcengine.state import CalculatorState, ErrorKind, LastOperation
from calcengine.validators import count_digits

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from calcengine.operations import OperatorKind

logger = logging.getLogger(__name__)

# Digits accepted while typing one operand
MAX_INPUT_DIGITS = SIGNIFICANT_DIGITS


class CalculatorEngine:
    """
    Applies one action at a time to a CalculatorState.

    Evaluation is left to right without precedence: ``2 + 3 * 4 =`` gives
    20. The engine holds no state of its own; ``apply`` takes a state and
    returns a new one and never raises for a valid action. Division by zero
    and overflow are recorded in ``state.error`` instead, and every action
    but AllClear is ignored until the error is cleared.

    Example:
        >>> engine = CalculatorEngine()
        >>> state = engine.run([Digit(6), Operator(OperatorKind.ADD), Digit(2), Equals()])
        >>> state.current_operand
        '8'
    """

    def __init__(self, max_input_digits: int = MAX_INPUT_DIGITS) -> None:
        if not 1 <= max_input_digits <= MAX_INPUT_DIGITS:
            raise ValueError(
                f"max_input_digits must be between 1 and {MAX_INPUT_DIGITS}"
            )
        self.max_input_digits = max_input_digits
        self._handlers: dict[type, Callable[[CalculatorState, Action], CalculatorState]] = {
            Digit: self._digit,
            Decimal: self._decimal,
            Operator: self._operator,
            Equals: self._equals,
            ClearEntry: self._clear_entry,
            AllClear: self._all_clear,
            ToggleSign: self._toggle_sign,
            Percent: self._percent,
        }

    @staticmethod
    def initial_state() -> CalculatorState:
        return CalculatorState()

    def apply(self, state: CalculatorState, action: Action) -> CalculatorState:
        """
        Return the state that follows ``state`` after ``action``.

        Raises:
            TypeError: If action is not part of the action vocabulary
        """
        handler = self._handlers.get(type(action))
        if handler is None:
            raise TypeError(f"Unknown action: {action!r}")

        if state.error is not None and not isinstance(action, AllClear):
            return state

        return handler(state, action)

    def run(
        self, actions: Iterable[Action], state: CalculatorState | None = None
    ) -> CalculatorState:
        """Apply a sequence of actions, starting from the initial state by default."""
        if state is None:
            state = self.initial_state()
        for action in actions:
            state = self.apply(state, action)
        return state

    @staticmethod
    def value_of(state: CalculatorState) -> float:
        """Signed numeric value of the operand on display."""
        value = parse_number(state.current_operand)
        return -value if state.is_negative else value

    # -- transitions --------------------------------------------------------

    def _digit(self, state: CalculatorState, action: Digit) -> CalculatorState:
        if state.awaiting_operand:
            return replace(
                state,
                current_operand=str(action.value),
                is_negative=False,
                awaiting_operand=False,
            )

        if count_digits(state.current_operand) >= self.max_input_digits:
            logger.debug("Digit %d dropped, operand is full", action.value)
            return state

        if state.current_operand == "0":
            return replace(state, current_operand=str(action.value))

        return replace(state, current_operand=state.current_operand + str(action.value))

    def _decimal(self, state: CalculatorState, action: Decimal) -> CalculatorState:
        if state.awaiting_operand:
            return replace(
                state, current_operand="0.", is_negative=False, awaiting_operand=False
            )

        if "." in state.current_operand:
            return state

        return replace(state, current_operand=state.current_operand + ".")

    def _operator(self, state: CalculatorState, action: Operator) -> CalculatorState:
        if state.pending_operator is not None and state.awaiting_operand:
            # Chained operator: the new one replaces the pending one
            return replace(state, pending_operator=action.kind)

        value = self.value_of(state)

        if state.pending_operator is None or state.accumulator is None:
            return replace(
                state,
                accumulator=value,
                pending_operator=action.kind,
                awaiting_operand=True,
            )

        try:
            result = state.pending_operator.apply(state.accumulator, value)
        except (DivisionByZeroError, OverflowError) as e:
            return self._fail(state, e)

        return replace(
            self._show(state, result),
            accumulator=result,
            pending_operator=action.kind,
            awaiting_operand=True,
        )

    def _equals(self, state: CalculatorState, action: Equals) -> CalculatorState:
        value = self.value_of(state)

        if state.pending_operator is not None and state.accumulator is not None:
            operator: OperatorKind = state.pending_operator
            left, right = state.accumulator, value
        elif state.last_operation is not None:
            operator = state.last_operation.operator
            left, right = value, state.last_operation.operand
        else:
            return state

        try:
            result = operator.apply(left, right)
        except (DivisionByZeroError, OverflowError) as e:
            return self._fail(state, e)

        return replace(
            self._show(state, result),
            accumulator=None,
            pending_operator=None,
            awaiting_operand=True,
            last_operation=LastOperation(operator=operator, operand=right),
        )

    def _clear_entry(self, state: CalculatorState, action: ClearEntry) -> CalculatorState:
        return replace(
            state, current_operand="0", is_negative=False, awaiting_operand=True
        )

    def _all_clear(self, state: CalculatorState, action: AllClear) -> CalculatorState:
        return self.initial_state()

    def _toggle_sign(self, state: CalculatorState, action: ToggleSign) -> CalculatorState:
        if state.current_operand == "0":
            return state
        return replace(state, is_negative=not state.is_negative)

    def _percent(self, state: CalculatorState, action: Percent) -> CalculatorState:
        # Relative to the operand alone, never to the accumulator
        text = format_number(parse_number(state.current_operand) / 100)
        return replace(
            state,
            current_operand=text,
            is_negative=state.is_negative and text != "0",
        )

    # -- helpers ------------------------------------------------------------

    @staticmethod
    def _show(state: CalculatorState, result: float) -> CalculatorState:
        """Put a computed result on the display as unsigned text plus sign."""
        text = format_number(result)
        negative = text.startswith("-")
        return replace(
            state, current_operand=text.lstrip("-"), is_negative=negative
        )

    @staticmethod
    def _fail(
        state: CalculatorState, error: DivisionByZeroError | OverflowError
    ) -> CalculatorState:
        if isinstance(error, DivisionByZeroError):
            kind = ErrorKind.DIVISION_BY_ZERO
            logger.info("Division by zero, numerator %s", error.numerator)
        else:
            kind = ErrorKind.OVERFLOW
            logger.info(
                "Overflow in %s of %s", error.operation, " and ".join(map(str, error.operands))
            )
        return replace(state, error=kind, accumulator=None, pending_operator=None)


_default_engine = CalculatorEngine()


def apply(state: CalculatorState, action: Action) -> CalculatorState:
    """Module-level shortcut for ``CalculatorEngine().apply``."""
    return _default_engine.apply(state, action)

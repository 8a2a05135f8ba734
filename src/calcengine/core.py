"""Calculator session providing stateful key-press handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from calcengine.actions import AllClear, Equals
from calcengine.classifier import classify
from calcengine.engine import CalculatorEngine
from calcengine.exceptions import CalculatorError
from calcengine.formatter import format_number, render

if TYPE_CHECKING:
    from collections.abc import Iterable

    from calcengine.actions import Action
    from calcengine.formatter import Display
    from calcengine.state import CalculatorState


@dataclass(frozen=True)
class TapeEntry:
    """One completed calculation, as a paper-tape calculator prints it."""

    expression: str
    result: str

    def __str__(self) -> str:
        return f"{self.expression} = {self.result}"


class Calculator:
    """
    A calculator session with undo and a results tape.

    This class wraps the pure engine for callers that want an object to
    press keys on:
    - Chained key presses
    - Snapshot history for undo
    - A tape of completed calculations for this session only

    Example:
        >>> calc = Calculator()
        >>> calc.press_all("6 + 2 = =".split()).display.text
        '10'
        >>> calc.undo().display.text
        '8'
    """

    def __init__(self, engine: CalculatorEngine | None = None) -> None:
        self._engine = engine or CalculatorEngine()
        self._state = self._engine.initial_state()
        self._history: list[CalculatorState] = [self._state]
        self._tape: list[TapeEntry] = []

    @property
    def state(self) -> CalculatorState:
        """Current engine state."""
        return self._state

    @property
    def display(self) -> Display:
        return render(self._state)

    @property
    def value(self) -> float:
        """Signed value of the operand on display."""
        return self._engine.value_of(self._state)

    @property
    def history(self) -> list[CalculatorState]:
        """Every state this session has been in, oldest first."""
        return self._history.copy()

    @property
    def tape(self) -> list[TapeEntry]:
        return self._tape.copy()

    def press(self, token: str) -> Calculator:
        """Classify a raw token and apply it; unknown tokens are ignored."""
        action = classify(token)
        if action is None:
            return self
        return self.dispatch(action)

    def press_all(self, tokens: Iterable[str]) -> Calculator:
        for token in tokens:
            self.press(token)
        return self

    def dispatch(self, action: Action) -> Calculator:
        """Apply an action and record the resulting state."""
        previous = self._state
        new_state = self._engine.apply(previous, action)

        # A repeated Equals may leave the state as it was and still compute
        if isinstance(action, Equals) and new_state.error is None:
            expression = self._describe(previous)
            if expression is not None:
                self._tape.append(TapeEntry(expression, new_state.operand_text))

        if new_state == previous:
            return self

        self._state = new_state
        self._history.append(new_state)
        return self

    def clear(self) -> Calculator:
        """Reset to the initial state; history and tape are kept."""
        return self.dispatch(AllClear())

    def undo(self) -> Calculator:
        """
        Return to the state before the last effective action.

        Raises:
            CalculatorError: If no actions to undo
        """
        if len(self._history) <= 1:
            raise CalculatorError("Nothing to undo")

        self._history.pop()
        self._state = self._history[-1]
        return self

    def copy(self) -> Calculator:
        """Create an independent copy of this session."""
        new_calc = Calculator(self._engine)
        new_calc._state = self._state
        new_calc._history = self._history.copy()
        new_calc._tape = self._tape.copy()
        return new_calc

    def _describe(self, state: CalculatorState) -> str | None:
        """The expression an Equals press on ``state`` evaluates, if any."""
        if state.error is not None:
            return None
        if state.pending_operator is not None and state.accumulator is not None:
            return (
                f"{format_number(state.accumulator)} "
                f"{state.pending_operator.symbol} {state.operand_text}"
            )
        last = state.last_operation
        if last is None:
            return None
        return f"{state.operand_text} {last.operator.symbol} {format_number(last.operand)}"

    def __repr__(self) -> str:
        return f"Calculator(display={self.display.text!r}, history_len={len(self._history)})"

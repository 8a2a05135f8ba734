"""Mapping of raw button ids and key names to actions."""

from __future__ import annotations

import logging

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
from calcengine.operations import OperatorKind

logger = logging.getLogger(__name__)

TOKEN_TABLE: dict[str, Action] = {
    **{str(d): Digit(d) for d in range(10)},
    ".": Decimal(),
    "+": Operator(OperatorKind.ADD),
    "-": Operator(OperatorKind.SUB),
    "−": Operator(OperatorKind.SUB),
    "*": Operator(OperatorKind.MUL),
    "×": Operator(OperatorKind.MUL),
    "/": Operator(OperatorKind.DIV),
    "÷": Operator(OperatorKind.DIV),
    "=": Equals(),
    "Enter": Equals(),
    "C": ClearEntry(),
    "CE": ClearEntry(),
    "Backspace": ClearEntry(),
    "AC": AllClear(),
    "Escape": AllClear(),
    "±": ToggleSign(),
    "+/-": ToggleSign(),
    "%": Percent(),
}


def classify(token: object) -> Action | None:
    """
    Classify a raw token into an action.

    Unrecognized tokens give None; callers drop them.

    Example:
        >>> classify("7")
        Digit(value=7)
        >>> classify("sin") is None
        True
    """
    if not isinstance(token, str):
        logger.debug("Dropping non-string token %r", token)
        return None

    action = TOKEN_TABLE.get(token.strip())
    if action is None:
        logger.debug("Dropping unrecognized token %r", token)
    return action

"""
Keypad calculator engine.

A deterministic state machine for four-function calculators:
- Left-to-right evaluation with chained and repeated operators
- Immutable state, one action at a time
- Sticky division-by-zero and overflow errors
- Bounded display formatting
"""

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
from calcengine.classifier import classify
from calcengine.core import Calculator, TapeEntry
from calcengine.engine import MAX_INPUT_DIGITS, CalculatorEngine, apply
from calcengine.exceptions import (
    CalculatorError,
    DivisionByZeroError,
    InvalidInputError,
    OverflowError,
)
from calcengine.formatter import (
    EXPONENT_THRESHOLD,
    SIGNIFICANT_DIGITS,
    Display,
    format_number,
    parse_number,
    render,
)
from calcengine.keyboard import KeyboardAdapter, KeyEvent
from calcengine.operations import (
    OVERFLOW_THRESHOLD,
    OperatorKind,
    add,
    divide,
    multiply,
    subtract,
)
from calcengine.state import CalculatorState, ErrorKind, LastOperation
from calcengine.validators import (
    validate_digit,
    validate_number,
)

__all__ = [
    "EXPONENT_THRESHOLD",
    "MAX_INPUT_DIGITS",
    "OVERFLOW_THRESHOLD",
    "SIGNIFICANT_DIGITS",
    "Action",
    "AllClear",
    "Calculator",
    "CalculatorEngine",
    "CalculatorError",
    "CalculatorState",
    "ClearEntry",
    "Decimal",
    "Digit",
    "Display",
    "DivisionByZeroError",
    "Equals",
    "ErrorKind",
    "InvalidInputError",
    "KeyEvent",
    "KeyboardAdapter",
    "LastOperation",
    "Operator",
    "OperatorKind",
    "OverflowError",
    "Percent",
    "TapeEntry",
    "ToggleSign",
    "add",
    "apply",
    "classify",
    "divide",
    "format_number",
    "multiply",
    "parse_number",
    "render",
    "subtract",
    "validate_digit",
    "validate_number",
]

__version__ = "0.1.0"

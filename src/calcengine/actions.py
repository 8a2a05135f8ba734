"""The action vocabulary consumed by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from calcengine.operations import OperatorKind
from calcengine.validators import validate_digit


@dataclass(frozen=True)
class Digit:
    """A digit key, 0 through 9."""

    value: int

    def __post_init__(self) -> None:
        validate_digit(self.value)


@dataclass(frozen=True)
class Decimal:
    """The decimal point key."""


@dataclass(frozen=True)
class Operator:
    """One of the binary operator keys."""

    kind: OperatorKind


@dataclass(frozen=True)
class Equals:
    """Completes the pending operation, or repeats the last one."""


@dataclass(frozen=True)
class ClearEntry:
    """Clears only the operand being typed."""


@dataclass(frozen=True)
class AllClear:
    """Resets the calculator, including any error."""


@dataclass(frozen=True)
class ToggleSign:
    """Flips the sign of the current operand."""


@dataclass(frozen=True)
class Percent:
    """Divides the current operand by 100."""


Action = Union[
    Digit, Decimal, Operator, Equals, ClearEntry, AllClear, ToggleSign, Percent
]

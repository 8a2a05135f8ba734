"""
Command-line front end for the calculator engine.

Tokens are the same ones the keypad uses, so shell-special keys need
quoting:

  python -m calcengine 6 + 2 = =
  python -m calcengine 10 '/' 4 = --tape
  python -m calcengine --interactive
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import TYPE_CHECKING

from calcengine import __version__
from calcengine.core import Calculator

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import TextIO

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
QUIT_WORDS = {"quit", "exit"}
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def setup_logging(level: str) -> None:
    """Configure root logging for the command-line run."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="calcengine",
        description="Keypad calculator: press tokens left to right.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Tokens:
  0-9 .            digits and decimal point
  + - * /          operators (also × ÷ −)
  = Enter          equals, repeat to redo the last operation
  C CE             clear entry
  AC               all clear
  ± +/-            toggle sign
  %                percent of the current operand
""",
    )
    parser.add_argument("tokens", nargs="*", help="Keys to press, in order")
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Read keys from standard input, one line at a time",
    )
    parser.add_argument(
        "--tape",
        action="store_true",
        help="Print every completed calculation at the end",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("CALCENGINE_LOG_LEVEL", "WARNING"),
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging level (default: $CALCENGINE_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)
    # Defaults bypass the choices check
    if args.log_level not in LOG_LEVELS:
        parser.error(
            f"invalid log level {args.log_level!r} from CALCENGINE_LOG_LEVEL "
            f"(choose from {', '.join(LOG_LEVELS)})"
        )
    return args


def format_display(calc: Calculator) -> str:
    display = calc.display
    if display.has_error:
        return f"{display.text}: {display.error_message}"
    return display.text


def split_tokens(line: str) -> list[str]:
    """
    Split a line into tokens.

    Whitespace separates tokens; a word that is not a known multi-character
    token ("AC", "CE", "+/-") is pressed one character at a time, so
    ``12+3=`` works as well as ``12 + 3 =``.
    """
    tokens: list[str] = []
    for word in line.split():
        if len(word) > 1 and word not in ("AC", "CE", "+/-", "Enter", "Escape", "Backspace"):
            tokens.extend(word)
        else:
            tokens.append(word)
    return tokens


def run_interactive(calc: Calculator, stdin: TextIO, stdout: TextIO) -> None:
    for line in stdin:
        if line.strip().lower() in QUIT_WORDS:
            break
        calc.press_all(split_tokens(line))
        print(format_display(calc), file=stdout)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    calc = Calculator()
    tokens = [token for word in args.tokens for token in split_tokens(word)]
    logger.debug("Pressing %d tokens", len(tokens))
    calc.press_all(tokens)

    if args.interactive:
        run_interactive(calc, sys.stdin, sys.stdout)
    else:
        print(format_display(calc))

    if args.tape:
        for entry in calc.tape:
            print(entry)

    return 1 if calc.display.has_error else 0

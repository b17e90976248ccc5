"""
tools/calculator.py — Calculator Tool

Evaluates "<word> <number> <operator> <number>", e.g. "calculate 3 + 4".
Tokens past the fourth are ignored. Every failure is returned as text.

Numbers are plain decimal literals: optional sign, digits with an optional
fraction, optional exponent, optional trailing d/f. Named values ("nan",
"inf") and digit separators ("1_000") are rejected.

Results are shown with two decimals, rounding the shortest decimal form of
each value half-up (1.005 -> 1.01, 0.125 -> 0.13). Division follows
IEEE-754 instead of raising: x / 0 is inf or -inf and 0 / 0 is nan.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import TYPE_CHECKING, Callable

from tools.types import Tool

if TYPE_CHECKING:
    from agent.session import Session

_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?[df]?")

_CENTS = Decimal("0.01")
# Wide enough to hold any finite double to two places
_DECIMAL_CTX = Context(prec=400)


def _ieee_divide(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    # sign of zero matters: 1 / -0.0 is -inf
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


OPERATIONS: dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _ieee_divide,
}


def parse_number(token: str) -> float:
    """Parse a decimal literal. Raises ValueError for anything else."""
    if not _NUMBER_RE.fullmatch(token):
        raise ValueError(f'For input string: "{token}"')
    return float(token.rstrip("df"))


def format_number(value: float) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    rounded = Decimal(repr(value)).quantize(_CENTS, rounding=ROUND_HALF_UP, context=_DECIMAL_CTX)
    return f"{rounded:f}"


class CalculatorTool(Tool):
    name = "calculator"
    description = "Binary arithmetic: calculate <number> <+|-|*|/> <number>"
    category = "math"

    def execute(self, text: str, session: "Session") -> str:
        parts = text.lower().split()
        if len(parts) < 4:
            return (
                "Error calculating: expected '<command> <number> <operator> <number>', "
                f"got {len(parts)} token(s)"
            )

        try:
            num1 = parse_number(parts[1])
            num2 = parse_number(parts[3])
        except ValueError as e:
            return f"Error calculating: {e}"

        operation = parts[2]
        fn = OPERATIONS.get(operation)
        if fn is None:
            return f"Unsupported operation: {operation}"

        result = fn(num1, num2)
        return f"{format_number(num1)} {operation} {format_number(num2)} = {format_number(result)}"

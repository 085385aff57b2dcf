"""Arithmetic primitives, the rounding policy, and display formatting.

Primitives never raise. A result outside the operation's domain is
signalled with ``math.nan``; the engine maps it to its error state.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Results are kept to six decimal places
ROUNDING_SCALE = 1e6

# Beyond this scaled magnitude a float has no fractional part left to round
_EXACT_LIMIT = 2.0**52

# Magnitude from which display text switches to exponent notation
EXPONENT_THRESHOLD = 1e21

NAN = math.nan


def is_domain_error(value: float) -> bool:
    """Return True if value is the domain-error sentinel."""
    return math.isnan(value)


def _finite(result: float) -> float:
    return result if math.isfinite(result) else NAN


def add(a: float, b: float) -> float:
    """
    Add two numbers.

    Properties:
        - Commutative: add(a, b) == add(b, a)
        - Identity: add(a, 0) == a
    """
    return _finite(a + b)


def subtract(a: float, b: float) -> float:
    """
    Subtract b from a.

    Properties:
        - Anti-commutative: subtract(a, b) == -subtract(b, a)
        - Self-inverse: subtract(a, a) == 0
    """
    return _finite(a - b)


def multiply(a: float, b: float) -> float:
    """
    Multiply two numbers.

    Properties:
        - Commutative: multiply(a, b) == multiply(b, a)
        - Zero: multiply(a, 0) == 0
    """
    return _finite(a * b)


def divide(a: float, b: float) -> float:
    """
    Divide a by b.

    Returns:
        Quotient of a and b, or NaN if b is zero
    """
    if b == 0:
        return NAN
    return _finite(a / b)


def power(base: float, exponent: float) -> float:
    """
    Raise base to the power of exponent.

    Follows IEEE rules for negative and fractional exponents. Results
    that are complex (negative base, fractional exponent), undefined
    (zero base, negative exponent) or overflow are domain errors.
    """
    try:
        result = math.pow(base, exponent)
    except (ValueError, OverflowError):
        return NAN
    return _finite(result)


def square(x: float) -> float:
    """Return x * x. Defined everywhere except on overflow."""
    return _finite(x * x)


def square_root(x: float) -> float:
    """Return the square root of x, or NaN for negative x."""
    if x < 0:
        return NAN
    return math.sqrt(x)


def reciprocal(x: float) -> float:
    """Return 1 / x, or NaN for zero."""
    if x == 0:
        return NAN
    return _finite(1 / x)


def percent(x: float) -> float:
    """Return x / 100."""
    return x / 100


BINARY_OPERATORS: dict[str, Callable[[float, float], float]] = {
    "+": add,
    "-": subtract,
    "*": multiply,
    "/": divide,
    "^": power,
}


def round_result(value: float) -> float:
    """
    Round to six decimal places, halves away from zero.

    NaN passes through untouched. Negative zero becomes 0.0 so that it
    never renders as "-0".

    Examples:
        >>> round_result(0.1 + 0.2)
        0.3
        >>> round_result(-2 / 3)
        -0.666667
    """
    if math.isnan(value):
        return value
    scaled = abs(value) * ROUNDING_SCALE
    if not math.isfinite(scaled) or scaled >= _EXACT_LIMIT:
        return value + 0.0
    rounded = math.copysign(math.floor(scaled + 0.5), value) / ROUNDING_SCALE
    return rounded + 0.0


def apply_operator(op: str, a: float, b: float) -> float:
    """
    Apply the binary operator glyph to (a, b) and round the result.

    An unknown glyph yields b unchanged.
    """
    operation = BINARY_OPERATORS.get(op)
    if operation is None:
        return b
    return round_result(operation(a, b))


def apply_unary(operation: Callable[[float], float], x: float) -> float:
    """Apply a unary primitive and round the result."""
    return round_result(operation(x))


def format_number(value: float) -> str:
    """
    Render a finite number as display text.

    Integral values drop the fractional part and magnitudes below 1e21
    are written positionally, never in exponent form.

    Examples:
        >>> format_number(3.0)
        '3'
        >>> format_number(1e-07)
        '0.0000001'
    """
    value = float(value) + 0.0
    if value.is_integer() and abs(value) < EXPONENT_THRESHOLD:
        return str(int(value))
    text = repr(value)
    if "e" in text and abs(value) < EXPONENT_THRESHOLD:
        text = format(Decimal(text), "f")
    return text


def parse_display(text: str) -> float:
    """
    Read the numeric value of display text.

    Partial input such as "3." parses as 3.0. Text with no numeric value
    ("", "-", "Error") reads as 0.0. Text too large for a float (a long run
    of typed digits) reads as the domain-error sentinel.
    """
    try:
        value = float(text)
    except (TypeError, ValueError):
        return 0.0
    return _finite(value)

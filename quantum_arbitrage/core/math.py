"""Saturating and checked integer arithmetic.

Python integers never wrap, so every bound is explicit: saturating helpers
clamp into ``[0, limit]`` and checked helpers raise ``NumericOverflow``.
Division takes an explicit rounding mode so that callers state whether a
quotient floors (amounts paid out) or ceils (amounts charged).
"""

from enum import Enum

from quantum_arbitrage.config import U64_MAX, U128_MAX
from quantum_arbitrage.core.exceptions import NumericOverflow

__all__ = [
    "U64_MAX",
    "U128_MAX",
    "Rounding",
    "is_u64",
    "fits_u64",
    "saturate",
    "saturating_add",
    "saturating_sub",
    "checked_add",
    "mul_div",
    "saturating_mul_div",
]


class Rounding(Enum):
    """Rounding mode for integer division."""
    DOWN = "down"  # floor, used for outputs
    UP = "up"      # ceil, used for inputs


def is_u64(value: int) -> bool:
    return 0 <= value <= U64_MAX


def fits_u64(*terms: int) -> bool:
    """Whether the sum of ``terms`` is still a valid u64 amount."""
    return is_u64(sum(terms))


def saturate(value: int, limit: int = U64_MAX) -> int:
    """Clamp ``value`` into ``[0, limit]``."""
    if value < 0:
        return 0
    if value > limit:
        return limit
    return value


def saturating_add(a: int, b: int, limit: int = U64_MAX) -> int:
    return saturate(a + b, limit)


def saturating_sub(a: int, b: int) -> int:
    """Subtract, flooring at zero."""
    return a - b if a > b else 0


def checked_add(a: int, b: int, limit: int = U64_MAX) -> int:
    result = a + b
    if result > limit:
        raise NumericOverflow(result, limit)
    return result


def mul_div(a: int, b: int, c: int, rounding: Rounding = Rounding.DOWN) -> int:
    """Compute ``a * b / c`` exactly with the given rounding.

    Operands must be non-negative. The intermediate product is unbounded;
    bound the result with ``saturating_mul_div`` where needed.

    Raises:
        ZeroDivisionError: If ``c`` is zero
        ValueError: If any operand is negative
    """
    if c == 0:
        raise ZeroDivisionError("mul_div by zero")
    if a < 0 or b < 0 or c < 0:
        raise ValueError(f"mul_div operands must be non-negative, got {a}, {b}, {c}")
    quotient, remainder = divmod(a * b, c)
    if rounding is Rounding.UP and remainder:
        quotient += 1
    return quotient


def saturating_mul_div(
    a: int, b: int, c: int, rounding: Rounding = Rounding.DOWN, limit: int = U64_MAX
) -> int:
    return saturate(mul_div(a, b, c, rounding), limit)

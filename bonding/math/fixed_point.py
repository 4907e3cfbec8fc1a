"""18-decimal fixed-point helpers.

All token quantities are integers scaled by 10^18 (ONE). Every division in
this module floors; callers rely on the exact truncation order, so the
helpers must not be replaced with a single higher-precision division.
"""

from __future__ import annotations

from bonding.safe_int import S

__all__ = [
    "ONE",
    "ONE_SQUARED",
    "BPS_DENOMINATOR",
    "mul_div",
    "cube_whole_units",
]

ONE = 10**18
ONE_SQUARED = ONE * ONE

# Fee rates are expressed in basis points of this denominator
BPS_DENOMINATOR = 10_000


def mul_div(x: int, y: int, denominator: int) -> int:
    """Compute floor(x * y / denominator).

    The product x * y may exceed 256 bits; only the result is range-checked.

    Args:
        x: First factor (uint256)
        y: Second factor (uint256)
        denominator: Divisor (uint256, non-zero)

    Returns:
        The floored quotient

    Raises:
        Uint256Overflow: If an operand or the result is outside uint256
        DivisionByZero: If denominator is zero
    """
    return S(x).mul_div(y, denominator).value


def cube_whole_units(supply: int) -> int:
    """Compute supply^3 / ONE^3 as two chained floor divisions.

    The square is reduced to 18 decimals first (s^2 / ONE), then multiplied
    by s and reduced by ONE^2. The result is the cube of the supply in whole
    units, truncated.
    """
    squared = mul_div(supply, supply, ONE)
    return mul_div(squared, supply, ONE_SQUARED)

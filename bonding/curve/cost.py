"""Integral cost engine.

The cost of moving supply from s0 to s1 is the discrete evaluation of

    integral(a * x^2 + b) dx from s0 to s1 = a/3 * (s1^3 - s0^3) + b * (s1 - s0)

in 18-decimal fixed point. Each cube is truncated to whole units through two
chained floor divisions, and the linear term is floored once. Buys, sells and
the reserve requirement all go through integral_cost, so the truncation is
identical on every side of the reserve invariant.
"""

from __future__ import annotations

from bonding.curve.parameters import CurveParameters
from bonding.math.fixed_point import ONE, cube_whole_units, mul_div
from bonding.safe_int import S


def integral_cost(params: CurveParameters, start_supply: int, amount: int) -> int:
    """Value required (or owed) to move supply from start_supply by amount.

    Args:
        params: Curve coefficients
        start_supply: Supply before the move, 18-decimal units
        amount: Size of the move, 18-decimal units

    Returns:
        Cost in smallest currency subunits (0 when amount is 0)

    Raises:
        Uint256Overflow: If any intermediate result leaves uint256
    """
    if amount == 0:
        return 0

    s0 = S(start_supply)
    s1 = s0 + amount

    cube_delta = S(cube_whole_units(s1.value)) - cube_whole_units(s0.value)
    cubic_term = cube_delta * params.a_third
    linear_term = mul_div(params.base_price, amount, ONE)

    return (cubic_term + linear_term).value


def spot_price(params: CurveParameters, supply: int) -> int:
    """Instantaneous price a * (supply in whole units)^2 + b."""
    whole_units = S(supply) // ONE
    return (S(params.a_full) * whole_units * whole_units + params.base_price).value



def issuance_cost(params: CurveParameters, start_supply: int, amount: int) -> int:
    """Value a buy must add to the reserve to keep it at the curve requirement.

    Computed as integral_cost(0, s1) - integral_cost(0, s0). This equals
    integral_cost(params, start_supply, amount) except where flooring the
    linear term separately would drop a subunit, in which case it is one
    higher. Charging buys this way keeps reserve >= integral_cost(0, supply)
    for any sequence of amounts, not only those where b * amount divides ONE.

    Raises:
        Uint256Overflow: If any intermediate result leaves uint256
    """
    if amount == 0:
        return 0
    end_supply = (S(start_supply) + amount).value
    return (
        S(integral_cost(params, 0, end_supply)) - integral_cost(params, 0, start_supply)
    ).value

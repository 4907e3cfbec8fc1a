"""Reserve requirement and withdrawable surplus."""

from __future__ import annotations

from bonding.curve.cost import integral_cost
from bonding.curve.parameters import CurveParameters
from bonding.safe_int import S


def required_reserve(params: CurveParameters, supply: int) -> int:
    """Reserve that backs the full circulating supply: integral_cost(0, supply)."""
    return integral_cost(params, 0, supply)


def excess_reserve(params: CurveParameters, supply: int, reserve_balance: int) -> int:
    """Value held above the requirement, or 0 when there is none."""
    return S(reserve_balance).saturating_sub(required_reserve(params, supply)).value


def is_solvent(params: CurveParameters, supply: int, reserve_balance: int) -> bool:
    """True if the reserve covers the curve value of the supply."""
    return reserve_balance >= required_reserve(params, supply)

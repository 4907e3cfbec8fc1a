"""Fee calculation on curve amounts."""

from __future__ import annotations

from dataclasses import dataclass

from bonding.math.fixed_point import BPS_DENOMINATOR, mul_div
from bonding.safe_int import S


def compute_fee(base_amount: int, fee_bps: int) -> int:
    """floor(base_amount * fee_bps / 10000)."""
    return mul_div(base_amount, fee_bps, BPS_DENOMINATOR)


@dataclass(frozen=True)
class FeeBreakdown:
    """Curve amount split into its base value, the fee and the payer-facing total.

    For a buy the fee is added on top of the base cost (total = base + fee).
    For a sell it is deducted from the base refund (total = base - fee).

    Attributes:
        base: Curve value from the cost engine
        fee: Fee routed to the treasury
        total: Amount the trader pays (buy) or receives (sell)
    """

    base: int
    fee: int
    total: int

    @classmethod
    def for_buy(cls, base_cost: int, fee_bps: int) -> FeeBreakdown:
        fee = compute_fee(base_cost, fee_bps)
        return cls(base=base_cost, fee=fee, total=(S(base_cost) + fee).value)

    @classmethod
    def for_sell(cls, base_refund: int, fee_bps: int) -> FeeBreakdown:
        fee = compute_fee(base_refund, fee_bps)
        return cls(base=base_refund, fee=fee, total=(S(base_refund) - fee).value)

"""Fee handling for the market.

Usage:
    from bonding.fees import FeeBreakdown, FeeConfig

    config = FeeConfig(fee_bps=500, treasury=treasury)
    quote = FeeBreakdown.for_buy(base_cost, config.fee_bps)
    total_due = quote.total
"""

from bonding.fees.calculator import FeeBreakdown, compute_fee
from bonding.fees.config import MAX_FEE_BPS, FeeConfig, validate_fee_bps, validate_treasury

__all__ = [
    # Calculator
    "FeeBreakdown",
    "compute_fee",
    # Config
    "FeeConfig",
    "MAX_FEE_BPS",
    "validate_fee_bps",
    "validate_treasury",
]

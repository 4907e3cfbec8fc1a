"""Bonding curve market: curve-priced issuance backed by a redeemable reserve."""

__version__ = "0.1.0"

from bonding.config import MarketConfig  # noqa: E402
from bonding.curve import CurveParameters, integral_cost, spot_price  # noqa: E402
from bonding.market import BondingCurveMarket, BuyReceipt, SellReceipt  # noqa: E402
from bonding.runtime import Runtime  # noqa: E402

__all__ = [
    "BondingCurveMarket",
    "BuyReceipt",
    "CurveParameters",
    "MarketConfig",
    "Runtime",
    "SellReceipt",
    "integral_cost",
    "spot_price",
    "__version__",
]

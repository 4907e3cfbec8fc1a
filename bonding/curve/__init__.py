"""Curve shape and pricing."""

from bonding.curve.cost import integral_cost, issuance_cost, spot_price
from bonding.curve.parameters import CurveParameters

__all__ = ["CurveParameters", "integral_cost", "issuance_cost", "spot_price"]

"""Fixed-point primitives for curve pricing.

This package provides the 18-decimal integer helpers the cost engine is
built on:
- mul_div: floor(x * y / d) with a wide intermediate
- cube_whole_units: s^3 / ONE^3 via two chained floor divisions
"""

from bonding.math.fixed_point import BPS_DENOMINATOR, ONE, cube_whole_units, mul_div

__all__ = ["BPS_DENOMINATOR", "ONE", "cube_whole_units", "mul_div"]

"""Immutable curve coefficients."""

from __future__ import annotations

from dataclasses import dataclass

from bonding.errors import InvalidCurveParameters


@dataclass(frozen=True)
class CurveParameters:
    """Coefficients of the price function p(x) = a * x^2 + b.

    The quadratic coefficient is stored pre-divided by 3 so the integral
    a/3 * x^3 + b * x needs no fractional intermediate. The full coefficient
    is reconstructed on demand rather than stored a second time.

    Attributes:
        a_third: Quadratic coefficient divided by 3 (subunits per whole unit^3)
        base_price: Price floor in smallest currency subunits per whole unit
    """

    a_third: int
    base_price: int

    def __post_init__(self) -> None:
        if self.a_third <= 0:
            raise InvalidCurveParameters(f"a/3 must be positive, got {self.a_third}")
        if self.base_price <= 0:
            raise InvalidCurveParameters(f"Base price must be positive, got {self.base_price}")

    @classmethod
    def from_coefficients(cls, a: int, b: int) -> CurveParameters:
        """Build parameters from the full quadratic coefficient.

        Args:
            a: Quadratic coefficient, a positive multiple of 3
            b: Base price, positive

        Raises:
            InvalidCurveParameters: If a is not a positive multiple of 3 or b <= 0
        """
        if a <= 0 or a % 3 != 0:
            raise InvalidCurveParameters(f"a must be a positive multiple of 3, got {a}")
        return cls(a_third=a // 3, base_price=b)

    @property
    def a_full(self) -> int:
        """Full quadratic coefficient (a_third * 3)."""
        return self.a_third * 3

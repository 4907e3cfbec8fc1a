"""Tests for SafeInt checked uint256 arithmetic."""

import pytest

from bonding.safe_int import (
    UINT256_MAX,
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_negative_rejected(self):
        """Negative values are outside uint256."""
        with pytest.raises(Uint256Overflow):
            SafeInt(-1)

    def test_max_accepted(self):
        """UINT256_MAX itself is representable."""
        assert SafeInt(UINT256_MAX).value == UINT256_MAX

    def test_above_max_rejected(self):
        """2^256 is not representable."""
        with pytest.raises(Uint256Overflow):
            SafeInt(UINT256_MAX + 1)

    def test_invalid_types_rejected(self):
        """Strings, floats and bools are rejected."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt

    def test_zero(self):
        assert SafeInt.zero().value == 0


class TestSafeIntArithmetic:
    """Tests for checked arithmetic."""

    def test_add(self):
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15
        assert (5 + S(10)).value == 15

    def test_add_overflow(self):
        """Sum past UINT256_MAX raises."""
        with pytest.raises(Uint256Overflow):
            S(UINT256_MAX) + 1

    def test_sub(self):
        assert (S(10) - S(3)).value == 7
        assert (10 - S(3)).value == 7
        assert (S(5) - 5).value == 0

    def test_sub_underflow(self):
        """Subtraction below zero raises Underflow with both operands in the message."""
        with pytest.raises(Underflow) as exc_info:
            S(5) - S(10)
        assert "5 - 10" in str(exc_info.value)

    def test_rsub_underflow(self):
        with pytest.raises(Underflow):
            5 - S(10)

    def test_mul(self):
        assert (S(6) * S(7)).value == 42
        assert (6 * S(7)).value == 42

    def test_mul_overflow(self):
        """Product past UINT256_MAX raises."""
        with pytest.raises(Uint256Overflow):
            S(2**128) * S(2**128)

    def test_floordiv(self):
        assert (S(7) // 2).value == 3

    def test_floordiv_by_zero(self):
        with pytest.raises(DivisionByZero):
            S(7) // 0

    def test_errors_are_arithmetic_errors(self):
        """All SafeInt errors share the ArithmeticError base."""
        for err in (DivisionByZero, Underflow, Uint256Overflow):
            assert issubclass(err, SafeIntError)
            assert issubclass(err, ArithmeticError)


class TestMulDiv:
    """Tests for the wide-intermediate mul_div."""

    def test_basic(self):
        assert S(10).mul_div(3, 4).value == 7

    def test_product_may_exceed_uint256(self):
        """Only the quotient is range-checked."""
        assert S(UINT256_MAX).mul_div(UINT256_MAX, UINT256_MAX).value == UINT256_MAX

    def test_result_overflow(self):
        with pytest.raises(Uint256Overflow):
            S(UINT256_MAX).mul_div(2, 1)

    def test_zero_denominator(self):
        with pytest.raises(DivisionByZero):
            S(1).mul_div(1, 0)


class TestSafeIntComparisonAndConversion:
    def test_comparisons_with_int(self):
        assert S(5) == 5
        assert S(5) < 6
        assert S(5) <= 5
        assert S(5) > 4
        assert S(5) >= 5

    def test_bool(self):
        assert not S(0)
        assert S(1)

    def test_int_and_index(self):
        assert int(S(9)) == 9
        assert [0, 1, 2][S(1)] == 1

    def test_saturating_sub(self):
        assert S(3).saturating_sub(10).value == 0
        assert S(10).saturating_sub(3).value == 7

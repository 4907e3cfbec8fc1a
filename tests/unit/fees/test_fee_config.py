"""Tests for FeeConfig validation and setters."""

import pytest

from bonding.errors import FeeTooHigh, ZeroAddress
from bonding.fees import MAX_FEE_BPS, FeeConfig, validate_fee_bps, validate_treasury
from tests.helpers import ALICE, TREASURY, ZERO


class TestValidateFeeBps:
    @pytest.mark.parametrize("bps", [0, 1, 250, MAX_FEE_BPS])
    def test_accepts_range(self, bps):
        assert validate_fee_bps(bps) == bps

    def test_rejects_above_max(self):
        with pytest.raises(FeeTooHigh):
            validate_fee_bps(MAX_FEE_BPS + 1)

    def test_rejects_negative(self):
        with pytest.raises(ValueError, match="negative"):
            validate_fee_bps(-1)

    def test_max_is_five_percent(self):
        assert MAX_FEE_BPS == 500


class TestValidateTreasury:
    def test_normalizes_case(self):
        assert validate_treasury(ALICE.upper().replace("0X", "0x")) == ALICE

    def test_rejects_zero(self):
        with pytest.raises(ZeroAddress):
            validate_treasury(ZERO)

    def test_rejects_malformed(self):
        with pytest.raises(ValueError, match="Invalid address"):
            validate_treasury("0x1234")


class TestFeeConfig:
    def test_construction_validates(self):
        with pytest.raises(FeeTooHigh):
            FeeConfig(fee_bps=501, treasury=TREASURY)
        with pytest.raises(ZeroAddress):
            FeeConfig(fee_bps=100, treasury=ZERO)

    def test_set_fee_returns_previous(self):
        config = FeeConfig(fee_bps=500, treasury=TREASURY)
        assert config.set_fee_bps(100) == 500
        assert config.fee_bps == 100

    def test_rejected_fee_leaves_config_unchanged(self):
        config = FeeConfig(fee_bps=500, treasury=TREASURY)
        with pytest.raises(FeeTooHigh):
            config.set_fee_bps(10_000)
        assert config.fee_bps == 500

    def test_set_treasury_returns_previous(self):
        config = FeeConfig(fee_bps=500, treasury=TREASURY)
        assert config.set_treasury(ALICE) == TREASURY
        assert config.treasury == ALICE

    def test_rejected_treasury_leaves_config_unchanged(self):
        config = FeeConfig(fee_bps=500, treasury=TREASURY)
        with pytest.raises(ZeroAddress):
            config.set_treasury(ZERO)
        assert config.treasury == TREASURY

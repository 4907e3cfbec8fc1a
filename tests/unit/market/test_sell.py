"""Tests for BondingCurveMarket.sell."""

import pytest

from bonding.curve.parameters import CurveParameters
from bonding.errors import (
    AmountZero,
    InsufficientBalance,
    PoolBalanceTooLow,
    SupplyUnderflow,
    TransferFailed,
)
from bonding.events import Sold
from bonding.fees import FeeConfig
from bonding.market import BondingCurveMarket, SellReceipt
from bonding.runtime import Runtime
from bonding.safe_int import Uint256Overflow
from tests.helpers import (
    A_FULL,
    ALICE,
    BASE_PRICE,
    BOB,
    COST_FIRST_UNIT,
    COST_SECOND_UNIT,
    FEE_FIRST_UNIT,
    MARKET,
    ONE,
    OWNER,
    TRADER_FUNDING,
    TREASURY,
    RecordingPayee,
    buy_exact,
)

NET_FIRST_UNIT = COST_FIRST_UNIT - FEE_FIRST_UNIT  # 95_000_001_254_000


class InflatedLedger:
    """Ledger whose balances exceed its reported supply."""

    def mint(self, to, amount):
        pass

    def burn(self, holder, amount):
        pass

    def balance_of(self, holder):
        return 10 * ONE

    def total_supply(self):
        return ONE


class TestSell:
    def test_round_trip_single_unit(self, market, runtime):
        buy_exact(market, ALICE, ONE)
        receipt = market.sell(ALICE, ONE)

        assert receipt == SellReceipt(
            seller=ALICE, burned=ONE, net_refund=NET_FIRST_UNIT, fee=FEE_FIRST_UNIT
        )
        assert market.total_supply() == 0
        assert market.reserve_balance() == 0
        assert runtime.native_balance(TREASURY) == 2 * FEE_FIRST_UNIT
        assert runtime.native_balance(ALICE) == TRADER_FUNDING - 2 * FEE_FIRST_UNIT

    def test_sells_from_the_top_of_the_curve(self, market):
        """Selling one of two units refunds the second unit's cost."""
        buy_exact(market, ALICE, 2 * ONE)
        receipt = market.sell(ALICE, ONE)
        assert receipt.net_refund + receipt.fee == COST_SECOND_UNIT
        assert market.reserve_balance() == COST_FIRST_UNIT

    def test_reserve_stays_at_requirement(self, market):
        buy_exact(market, ALICE, 3 * ONE)
        buy_exact(market, BOB, 2 * ONE)
        market.sell(ALICE, 2 * ONE)
        market.sell(BOB, ONE)
        assert market.reserve_balance() == market.required_reserve()

    def test_sold_event(self, market, runtime):
        buy_exact(market, ALICE, ONE)
        market.sell(ALICE, ONE)
        assert runtime.events_of(Sold) == [
            Sold(seller=ALICE, amount=ONE, net_refund=NET_FIRST_UNIT, fee=FEE_FIRST_UNIT)
        ]

    def test_zero_amount(self, market):
        with pytest.raises(AmountZero):
            market.sell(ALICE, 0)

    def test_more_than_balance(self, market):
        buy_exact(market, ALICE, ONE)
        with pytest.raises(InsufficientBalance):
            market.sell(BOB, 1)
        with pytest.raises(InsufficientBalance):
            market.sell(ALICE, ONE + 1)

    def test_pool_balance_too_low(self, market):
        """Tokens minted outside the curve have no reserve behind them."""
        market.ledger.mint(ALICE, ONE)
        with pytest.raises(PoolBalanceTooLow):
            market.sell(ALICE, ONE)
        assert market.balance_of(ALICE) == ONE

    def test_supply_underflow_with_inconsistent_ledger(self):
        runtime = Runtime()
        market = BondingCurveMarket(
            runtime=runtime,
            ledger=InflatedLedger(),
            params=CurveParameters.from_coefficients(A_FULL, BASE_PRICE),
            fee_config=FeeConfig(fee_bps=500, treasury=TREASURY),
            owner=OWNER,
            address=MARKET,
        )
        with pytest.raises(SupplyUnderflow):
            market.sell(ALICE, 2 * ONE)

    def test_seller_rejecting_payout_reverts_sell(self, market, runtime):
        buy_exact(market, ALICE, ONE)
        runtime.register_payee(ALICE, RecordingPayee(accept=False))
        with pytest.raises(TransferFailed):
            market.sell(ALICE, ONE)
        assert market.balance_of(ALICE) == ONE
        assert market.reserve_balance() == COST_FIRST_UNIT
        assert runtime.events_of(Sold) == []

    def test_tokens_moved_between_holders_can_be_sold(self, market):
        buy_exact(market, ALICE, ONE)
        market.ledger.transfer(ALICE, BOB, ONE)
        receipt = market.sell(BOB, ONE)
        assert receipt.net_refund == NET_FIRST_UNIT
        assert market.total_supply() == 0

    def test_negative_amount(self, market, runtime):
        buy_exact(market, ALICE, ONE)
        with pytest.raises(Uint256Overflow):
            market.sell(ALICE, -ONE)
        assert market.balance_of(ALICE) == ONE
        assert market.reserve_balance() == COST_FIRST_UNIT
        assert runtime.events_of(Sold) == []

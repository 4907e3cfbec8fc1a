"""Bonding curve market: trading, administration and quotes.

The market issues tokens against payment at the curve price and redeems them
from its reserve. Every mutating operation follows the same shape:

1. enter the re-entrancy guard, then open a runtime transaction
2. validate inputs and price the move with integral_cost
3. effects: mint or burn on the ledger
4. interactions: outgoing value transfers (fee, refund, withdrawal)
5. emit the event record

Any error between 1 and 5 rolls the transaction back, so callers observe
either a full commit or no change at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import structlog

from bonding.access import Ownable
from bonding.config import DEFAULT_MARKET_CONFIG, MarketConfig, get_environment_config
from bonding.curve.cost import integral_cost, issuance_cost, spot_price
from bonding.curve.parameters import CurveParameters
from bonding.errors import (
    AmountZero,
    BondingCurveError,
    InsufficientBalance,
    InsufficientFunds,
    NoExcess,
    PoolBalanceTooLow,
    SupplyUnderflow,
    WithdrawAmountTooHigh,
    ZeroAddress,
)
from bonding.events import (
    Bought,
    FeeUpdated,
    OwnershipTransferred,
    Sold,
    TreasuryUpdated,
    Withdrawn,
)
from bonding.fees.calculator import FeeBreakdown
from bonding.fees.config import FeeConfig
from bonding.guard import ReentrancyGuard
from bonding.ledger import InMemoryTokenLedger, TokenLedger
from bonding.math.fixed_point import ONE, mul_div
from bonding.models.types import is_zero_address, normalize_address
from bonding.reserve import excess_reserve, is_solvent, required_reserve
from bonding.runtime import Runtime
from bonding.safe_int import S, SafeIntError

logger = structlog.get_logger()


@dataclass(frozen=True)
class BuyReceipt:
    """Outcome of a successful buy."""

    buyer: str
    minted: int
    base_cost: int
    fee: int
    # Overpayment returned to the buyer
    refund: int


@dataclass(frozen=True)
class SellReceipt:
    """Outcome of a successful sell."""

    seller: str
    burned: int
    net_refund: int
    fee: int


class BondingCurveMarket:
    """Market maker whose reserve always covers the curve value of the supply.

    Attributes:
        address: Identity holding the reserve on the runtime
        params: Immutable curve coefficients
        ledger: Token ledger the market mints into and burns from
    """

    def __init__(
        self,
        *,
        runtime: Runtime,
        ledger: TokenLedger,
        params: CurveParameters,
        fee_config: FeeConfig,
        owner: str,
        address: str,
    ) -> None:
        market_address = normalize_address(address, validate=True)
        if is_zero_address(market_address):
            raise ZeroAddress("Market address cannot be the zero address")

        self.address = market_address
        self.params = params
        self.ledger = ledger
        self._runtime = runtime
        self._fees = fee_config
        self._access = Ownable(owner)
        self._guard = ReentrancyGuard()

        runtime.register_state(self)
        runtime.register_payee(self.address, self.receive)

    @classmethod
    def deploy(cls, runtime: Runtime, config: MarketConfig | None = None) -> BondingCurveMarket:
        """Create a market and its token ledger from a MarketConfig.

        Raises:
            InvalidCurveParameters: If curve_a or curve_b is invalid
            FeeTooHigh: If fee_bps exceeds MAX_FEE_BPS
            ZeroAddress: If treasury, owner or market address is null
        """
        config = config or DEFAULT_MARKET_CONFIG
        params = CurveParameters.from_coefficients(config.curve_a, config.curve_b)
        fee_config = FeeConfig(fee_bps=config.fee_bps, treasury=config.treasury)
        ledger = InMemoryTokenLedger(config.token_name, config.token_symbol, runtime)
        market = cls(
            runtime=runtime,
            ledger=ledger,
            params=params,
            fee_config=fee_config,
            owner=config.owner,
            address=config.market_address,
        )
        logger.info(
            "market_deployed",
            address=market.address,
            a_third=params.a_third,
            base_price=params.base_price,
            fee_bps=fee_config.fee_bps,
            treasury=fee_config.treasury,
            owner=market.owner,
        )
        return market

    # =========================================================================
    # State reads
    # =========================================================================

    @property
    def runtime(self) -> Runtime:
        return self._runtime

    @property
    def owner(self) -> str:
        return self._access.owner

    @property
    def fee_bps(self) -> int:
        return self._fees.fee_bps

    @property
    def treasury(self) -> str:
        return self._fees.treasury

    def total_supply(self) -> int:
        return self.ledger.total_supply()

    def balance_of(self, holder: str) -> int:
        return self.ledger.balance_of(holder)

    def reserve_balance(self) -> int:
        """Native value held at the market address."""
        return self._runtime.native_balance(self.address)

    def required_reserve(self) -> int:
        """integral_cost(0, total_supply)."""
        return required_reserve(self.params, self.total_supply())

    def excess_reserve(self) -> int:
        """Reserve above the requirement; the only value the owner may withdraw."""
        return excess_reserve(self.params, self.total_supply(), self.reserve_balance())

    def solvency_margin(self) -> int:
        """reserve - required as a signed int; negative means undercollateralized."""
        return self.reserve_balance() - self.required_reserve()

    def is_solvent(self) -> bool:
        """True if the reserve covers the curve value of the supply."""
        return is_solvent(self.params, self.total_supply(), self.reserve_balance())

    # =========================================================================
    # Quotes (read only)
    # =========================================================================

    def preview_buy(self, amount: int) -> FeeBreakdown:
        """Base cost, fee and total due for buying amount at the current supply.

        Raises:
            AmountZero: If amount is 0
        """
        _require_amount(amount, "Buy")
        base_cost = issuance_cost(self.params, self.total_supply(), amount)
        return FeeBreakdown.for_buy(base_cost, self._fees.fee_bps)

    def preview_sell(self, amount: int) -> FeeBreakdown:
        """Base refund, fee and net payout for selling amount at the current supply.

        Raises:
            AmountZero: If amount is 0
            SupplyUnderflow: If amount exceeds the circulating supply
        """
        _require_amount(amount, "Sell")
        supply = self.total_supply()
        if supply < amount:
            raise SupplyUnderflow(f"Cannot sell {amount} out of supply {supply}")
        base_refund = integral_cost(self.params, supply - amount, amount)
        return FeeBreakdown.for_sell(base_refund, self._fees.fee_bps)

    def quote_buy(self, amount: int) -> int:
        """Total value a buy of amount requires (base cost + fee)."""
        return self.preview_buy(amount).total

    def quote_sell(self, amount: int) -> int:
        """Net value a sell of amount pays out (base refund - fee)."""
        return self.preview_sell(amount).total

    def current_price(self) -> int:
        """Spot price a * (supply in whole units)^2 + b."""
        return spot_price(self.params, self.total_supply())

    def average_buy_price(self, amount: int) -> int:
        """Average price per whole unit for buying amount, fee excluded.

        Raises:
            AmountZero: If amount is 0
        """
        _require_amount(amount, "Average price")
        cost = integral_cost(self.params, self.total_supply(), amount)
        return mul_div(cost, ONE, amount)

    def marginal_price(self) -> int:
        """Exact cost of the next whole unit.

        Integrates across the unit, so it sits slightly above current_price().
        """
        return integral_cost(self.params, self.total_supply(), ONE)

    # =========================================================================
    # Trading
    # =========================================================================

    def buy(self, caller: str, amount: int, value: int) -> BuyReceipt:
        """Mint amount tokens to caller against value attached to the call.

        Args:
            caller: Buyer identity; pays value out of its native balance
            amount: Tokens to mint, 18-decimal units
            value: Attached payment; anything above base cost + fee is refunded

        Raises:
            AmountZero: If amount is 0
            InsufficientFunds: If value is below base cost + fee
            Uint256Overflow: If amount or value is negative
            InsufficientNativeBalance: If caller cannot attach value
            TransferFailed: If the treasury or the caller rejects a payout
            ReentrantCall: If invoked while another operation is in flight
        """
        buyer = normalize_address(caller)
        with self._guard, self._runtime.transaction():
            try:
                _require_amount(amount, "Buy")

                self._runtime.attach_value(buyer, self.address, value)

                supply = self.total_supply()
                quote = FeeBreakdown.for_buy(
                    issuance_cost(self.params, supply, amount), self._fees.fee_bps
                )
                if value < quote.total:
                    raise InsufficientFunds(f"Sent {value}, buy of {amount} costs {quote.total}")
                refund = value - quote.total

                self.ledger.mint(buyer, amount)

                self._pay(self._fees.treasury, quote.fee)
                self._pay(buyer, refund)
            except (BondingCurveError, SafeIntError) as err:
                logger.warning(
                    "buy_rejected",
                    buyer=buyer,
                    amount=amount,
                    value=value,
                    reason=type(err).__name__,
                )
                raise

            self._runtime.emit(
                Bought(buyer=buyer, amount=amount, base_cost=quote.base, fee=quote.fee)
            )

        logger.info(
            "buy_executed",
            buyer=buyer,
            amount=amount,
            base_cost=quote.base,
            fee=quote.fee,
            refund=refund,
            supply=supply + amount,
        )
        return BuyReceipt(
            buyer=buyer, minted=amount, base_cost=quote.base, fee=quote.fee, refund=refund
        )

    def sell(self, caller: str, amount: int) -> SellReceipt:
        """Burn amount of caller's tokens and pay out the curve refund less fee.

        Raises:
            AmountZero: If amount is 0
            InsufficientBalance: If caller holds fewer than amount tokens
            Uint256Overflow: If amount is negative
            SupplyUnderflow: If amount exceeds the circulating supply
            PoolBalanceTooLow: If the reserve cannot cover the base refund
            TransferFailed: If the treasury or the caller rejects a payout
            ReentrantCall: If invoked while another operation is in flight
        """
        seller = normalize_address(caller)
        with self._guard, self._runtime.transaction():
            try:
                _require_amount(amount, "Sell")

                balance = self.ledger.balance_of(seller)
                if balance < amount:
                    raise InsufficientBalance(f"{seller} holds {balance}, cannot sell {amount}")

                # Implied by the balance check under a correct ledger
                supply = self.total_supply()
                if supply < amount:
                    raise SupplyUnderflow(f"Cannot sell {amount} out of supply {supply}")

                quote = FeeBreakdown.for_sell(
                    integral_cost(self.params, supply - amount, amount), self._fees.fee_bps
                )
                reserve = self.reserve_balance()
                if reserve < quote.base:
                    raise PoolBalanceTooLow(f"Reserve {reserve} cannot cover refund {quote.base}")

                self.ledger.burn(seller, amount)

                self._pay(self._fees.treasury, quote.fee)
                self._pay(seller, quote.total)
            except (BondingCurveError, SafeIntError) as err:
                logger.warning(
                    "sell_rejected",
                    seller=seller,
                    amount=amount,
                    reason=type(err).__name__,
                )
                raise

            self._runtime.emit(
                Sold(seller=seller, amount=amount, net_refund=quote.total, fee=quote.fee)
            )

        logger.info(
            "sell_executed",
            seller=seller,
            amount=amount,
            net_refund=quote.total,
            fee=quote.fee,
            supply=supply - amount,
        )
        return SellReceipt(seller=seller, burned=amount, net_refund=quote.total, fee=quote.fee)

    # =========================================================================
    # Administration
    # =========================================================================

    def withdraw(self, caller: str, to: str, amount: int) -> None:
        """Send amount of the reserve surplus to `to`.

        Raises:
            NotOwner: If caller is not the owner
            ValueError: If to is not a valid address
            ZeroAddress: If to is the null address
            AmountZero: If amount is 0
            Uint256Overflow: If amount is negative
            NoExcess: If the reserve does not exceed the requirement
            WithdrawAmountTooHigh: If amount exceeds the surplus
            TransferFailed: If the recipient rejects the transfer
        """
        with self._guard, self._runtime.transaction():
            try:
                self._access.require_owner(caller)
                recipient = normalize_address(to, validate=True)
                if is_zero_address(recipient):
                    raise ZeroAddress("Cannot withdraw to the zero address")
                _require_amount(amount, "Withdraw")

                reserve = self.reserve_balance()
                required = self.required_reserve()
                if reserve <= required:
                    raise NoExcess(f"Reserve {reserve} does not exceed requirement {required}")
                excess = reserve - required
                if amount > excess:
                    raise WithdrawAmountTooHigh(f"Requested {amount}, surplus is {excess}")

                self._pay(recipient, amount)
            except (BondingCurveError, SafeIntError) as err:
                logger.warning("withdraw_rejected", to=to, amount=amount, reason=type(err).__name__)
                raise

            self._runtime.emit(Withdrawn(to=recipient, amount=amount))

        logger.info(
            "reserve_withdrawn", to=recipient, amount=amount, remaining_excess=excess - amount
        )

    def update_fee(self, caller: str, new_fee_bps: int) -> None:
        """Replace the fee rate.

        Raises:
            NotOwner: If caller is not the owner
            FeeTooHigh: If new_fee_bps exceeds MAX_FEE_BPS
        """
        with self._guard, self._runtime.transaction():
            self._access.require_owner(caller)
            old_fee_bps = self._fees.set_fee_bps(new_fee_bps)
            self._runtime.emit(FeeUpdated(old_fee_bps=old_fee_bps, new_fee_bps=new_fee_bps))
        logger.info("fee_updated", old_fee_bps=old_fee_bps, new_fee_bps=new_fee_bps)

    def update_treasury(self, caller: str, new_treasury: str) -> None:
        """Replace the fee recipient.

        Raises:
            NotOwner: If caller is not the owner
            ZeroAddress: If new_treasury is the null address
        """
        with self._guard, self._runtime.transaction():
            self._access.require_owner(caller)
            old_treasury = self._fees.set_treasury(new_treasury)
            self._runtime.emit(
                TreasuryUpdated(old_treasury=old_treasury, new_treasury=self._fees.treasury)
            )
        logger.info("treasury_updated", old_treasury=old_treasury, new_treasury=self._fees.treasury)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """Hand admin rights to new_owner.

        Raises:
            NotOwner: If caller is not the owner
            ZeroAddress: If new_owner is the null address
        """
        with self._guard, self._runtime.transaction():
            self._access.require_owner(caller)
            previous = self._access.transfer_ownership(new_owner)
            self._runtime.emit(OwnershipTransferred(previous_owner=previous, new_owner=self.owner))
        logger.info("ownership_transferred", previous_owner=previous, new_owner=self.owner)

    # =========================================================================
    # Value plumbing
    # =========================================================================

    def receive(self, sender: str, amount: int) -> bool:
        """Accept unsolicited value into the reserve.

        Donations raise the reserve without minting, so they land in the
        withdrawable surplus.
        """
        logger.info("donation_received", sender=sender, amount=amount)
        return True

    def _pay(self, recipient: str, amount: int) -> None:
        if amount == 0:
            return
        self._runtime.transfer_value(self.address, recipient, amount)

    def snapshot(self) -> Any:
        return self._fees.fee_bps, self._fees.treasury, self._access.snapshot()

    def restore(self, state: Any) -> None:
        fee_bps, treasury, owner = state
        self._fees.fee_bps = fee_bps
        self._fees.treasury = treasury
        self._access.restore(owner)


@lru_cache(maxsize=1)
def get_default_market() -> BondingCurveMarket:
    """Process-wide market deployed on a fresh runtime from environment config."""
    return BondingCurveMarket.deploy(Runtime(), get_environment_config())


def _require_amount(amount: int, action: str) -> None:
    """Reject amounts outside uint256 and zero amounts.

    Raises:
        Uint256Overflow: If amount is negative or above UINT256_MAX
        AmountZero: If amount is 0
    """
    if S(amount) == 0:
        raise AmountZero(f"{action} amount must be greater than zero")

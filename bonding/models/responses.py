"""Pydantic models for market responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from bonding.fees.calculator import FeeBreakdown
from bonding.market import BondingCurveMarket, BuyReceipt, SellReceipt
from bonding.models.types import Address, Uint256


class QuoteResponse(BaseModel):
    """Base amount, fee and trader-facing total for a trade."""

    amount: Uint256
    base: Uint256
    fee: Uint256
    total: Uint256

    @classmethod
    def from_breakdown(cls, amount: int, breakdown: FeeBreakdown) -> QuoteResponse:
        return cls(amount=amount, base=breakdown.base, fee=breakdown.fee, total=breakdown.total)


class AveragePriceResponse(BaseModel):
    amount: Uint256
    average_price: Uint256 = Field(alias="averagePrice")

    model_config = {"populate_by_name": True}


class MarketStateResponse(BaseModel):
    """Snapshot of supply, reserve, pricing and admin settings."""

    address: Address
    token_symbol: str = Field(alias="tokenSymbol")
    total_supply: Uint256 = Field(alias="totalSupply")
    reserve_balance: Uint256 = Field(alias="reserveBalance")
    required_reserve: Uint256 = Field(alias="requiredReserve")
    excess_reserve: Uint256 = Field(alias="excessReserve")
    current_price: Uint256 = Field(alias="currentPrice")
    marginal_price: Uint256 = Field(alias="marginalPrice")
    a_third: Uint256 = Field(alias="aThird")
    base_price: Uint256 = Field(alias="basePrice")
    fee_bps: int = Field(alias="feeBps")
    treasury: Address
    owner: Address

    model_config = {"populate_by_name": True}

    @classmethod
    def from_market(cls, market: BondingCurveMarket) -> MarketStateResponse:
        return cls(
            address=market.address,
            token_symbol=getattr(market.ledger, "symbol", ""),
            total_supply=market.total_supply(),
            reserve_balance=market.reserve_balance(),
            required_reserve=market.required_reserve(),
            excess_reserve=market.excess_reserve(),
            current_price=market.current_price(),
            marginal_price=market.marginal_price(),
            a_third=market.params.a_third,
            base_price=market.params.base_price,
            fee_bps=market.fee_bps,
            treasury=market.treasury,
            owner=market.owner,
        )


class AccountResponse(BaseModel):
    address: Address
    token_balance: Uint256 = Field(alias="tokenBalance")
    native_balance: Uint256 = Field(alias="nativeBalance")

    model_config = {"populate_by_name": True}


class BuyResponse(BaseModel):
    buyer: Address
    minted: Uint256
    base_cost: Uint256 = Field(alias="baseCost")
    fee: Uint256
    refund: Uint256

    model_config = {"populate_by_name": True}

    @classmethod
    def from_receipt(cls, receipt: BuyReceipt) -> BuyResponse:
        return cls(
            buyer=receipt.buyer,
            minted=receipt.minted,
            base_cost=receipt.base_cost,
            fee=receipt.fee,
            refund=receipt.refund,
        )


class SellResponse(BaseModel):
    seller: Address
    burned: Uint256
    net_refund: Uint256 = Field(alias="netRefund")
    fee: Uint256

    model_config = {"populate_by_name": True}

    @classmethod
    def from_receipt(cls, receipt: SellReceipt) -> SellResponse:
        return cls(
            seller=receipt.seller,
            burned=receipt.burned,
            net_refund=receipt.net_refund,
            fee=receipt.fee,
        )


class StatusResponse(BaseModel):
    """Acknowledgement for admin and donation calls."""

    status: str = "ok"


class ErrorResponse(BaseModel):
    """Body returned for rejected operations."""

    error: str = Field(description="Error class name, e.g. InsufficientFunds")
    detail: str

"""API endpoints for the bonding curve market."""

import threading

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from bonding.config import MarketConfig, get_environment_config
from bonding.market import BondingCurveMarket, get_default_market
from bonding.models.requests import (
    BuyRequest,
    DonateRequest,
    FaucetRequest,
    SellRequest,
    TransferOwnershipRequest,
    UpdateFeeRequest,
    UpdateTreasuryRequest,
    WithdrawRequest,
)
from bonding.models.responses import (
    AccountResponse,
    AveragePriceResponse,
    BuyResponse,
    MarketStateResponse,
    QuoteResponse,
    SellResponse,
    StatusResponse,
)
from bonding.models.types import is_valid_address, normalize_address, validate_uint256

logger = structlog.get_logger()

router = APIRouter()

# Sync endpoints run on a worker pool; the market admits one call at a time
_market_lock = threading.Lock()


def get_market() -> BondingCurveMarket:
    """Dependency provider for the market instance.

    Override this in tests to inject a market on its own runtime:
        app.dependency_overrides[get_market] = lambda: market
    """
    return get_default_market()


def get_config() -> MarketConfig:
    """Dependency provider for service configuration."""
    return get_environment_config()


def _parse_amount(raw: str) -> int:
    try:
        return int(validate_uint256(raw))
    except ValueError as err:
        raise HTTPException(status_code=422, detail=str(err)) from err


# =============================================================================
# Reads
# =============================================================================


@router.get("/market", response_model=MarketStateResponse)
def market_state(market: BondingCurveMarket = Depends(get_market)) -> MarketStateResponse:
    """Supply, reserve, pricing and admin settings."""
    with _market_lock:
        return MarketStateResponse.from_market(market)


@router.get("/quote/buy", response_model=QuoteResponse)
def quote_buy(
    amount: str = Query(description="Tokens to buy, 18-decimal units"),
    market: BondingCurveMarket = Depends(get_market),
) -> QuoteResponse:
    """Base cost, fee and total value due for a buy."""
    value = _parse_amount(amount)
    with _market_lock:
        return QuoteResponse.from_breakdown(value, market.preview_buy(value))


@router.get("/quote/sell", response_model=QuoteResponse)
def quote_sell(
    amount: str = Query(description="Tokens to sell, 18-decimal units"),
    market: BondingCurveMarket = Depends(get_market),
) -> QuoteResponse:
    """Base refund, fee and net payout for a sell."""
    value = _parse_amount(amount)
    with _market_lock:
        return QuoteResponse.from_breakdown(value, market.preview_sell(value))


@router.get("/price/average", response_model=AveragePriceResponse)
def average_price(
    amount: str = Query(description="Tokens to buy, 18-decimal units"),
    market: BondingCurveMarket = Depends(get_market),
) -> AveragePriceResponse:
    """Average price per whole unit for a buy of amount, fee excluded."""
    value = _parse_amount(amount)
    with _market_lock:
        return AveragePriceResponse(amount=value, average_price=market.average_buy_price(value))


@router.get("/accounts/{address}", response_model=AccountResponse)
def account(address: str, market: BondingCurveMarket = Depends(get_market)) -> AccountResponse:
    """Token and native balances of an address."""
    if not is_valid_address(address):
        raise HTTPException(status_code=422, detail=f"Invalid address: {address}")
    holder = normalize_address(address)
    with _market_lock:
        return AccountResponse(
            address=holder,
            token_balance=market.balance_of(holder),
            native_balance=market.runtime.native_balance(holder),
        )


# =============================================================================
# Trading
# =============================================================================


@router.post("/buy", response_model=BuyResponse)
def buy(request: BuyRequest, market: BondingCurveMarket = Depends(get_market)) -> BuyResponse:
    """Mint tokens against attached value.

    Domain errors (InsufficientFunds, AmountZero, ...) are rendered by the
    app-level exception handlers.
    """
    logger.info("received_buy", caller=request.caller, amount=request.amount, value=request.value)
    with _market_lock:
        receipt = market.buy(request.caller, int(request.amount), int(request.value))
    return BuyResponse.from_receipt(receipt)


@router.post("/sell", response_model=SellResponse)
def sell(request: SellRequest, market: BondingCurveMarket = Depends(get_market)) -> SellResponse:
    """Burn tokens for the curve refund less fee."""
    logger.info("received_sell", caller=request.caller, amount=request.amount)
    with _market_lock:
        receipt = market.sell(request.caller, int(request.amount))
    return SellResponse.from_receipt(receipt)


@router.post("/donate", response_model=StatusResponse)
def donate(
    request: DonateRequest, market: BondingCurveMarket = Depends(get_market)
) -> StatusResponse:
    """Send value straight into the reserve surplus."""
    with _market_lock, market.runtime.transaction():
        market.runtime.transfer_value(request.sender, market.address, int(request.value))
    return StatusResponse()


# =============================================================================
# Administration
# =============================================================================


@router.post("/admin/withdraw", response_model=StatusResponse)
def withdraw(
    request: WithdrawRequest, market: BondingCurveMarket = Depends(get_market)
) -> StatusResponse:
    """Withdraw reserve surplus (owner only)."""
    with _market_lock:
        market.withdraw(request.caller, request.to, int(request.amount))
    return StatusResponse()


@router.post("/admin/fee", response_model=StatusResponse)
def update_fee(
    request: UpdateFeeRequest, market: BondingCurveMarket = Depends(get_market)
) -> StatusResponse:
    """Change the fee rate (owner only)."""
    with _market_lock:
        market.update_fee(request.caller, request.fee_bps)
    return StatusResponse()


@router.post("/admin/treasury", response_model=StatusResponse)
def update_treasury(
    request: UpdateTreasuryRequest, market: BondingCurveMarket = Depends(get_market)
) -> StatusResponse:
    """Change the fee recipient (owner only)."""
    with _market_lock:
        market.update_treasury(request.caller, request.treasury)
    return StatusResponse()


@router.post("/admin/owner", response_model=StatusResponse)
def transfer_ownership(
    request: TransferOwnershipRequest, market: BondingCurveMarket = Depends(get_market)
) -> StatusResponse:
    """Hand admin rights to another address (owner only)."""
    with _market_lock:
        market.transfer_ownership(request.caller, request.new_owner)
    return StatusResponse()


@router.post("/faucet", response_model=StatusResponse)
def faucet(
    request: FaucetRequest,
    market: BondingCurveMarket = Depends(get_market),
    config: MarketConfig = Depends(get_config),
) -> StatusResponse:
    """Credit native value to an address when the faucet is enabled."""
    if not config.faucet_enabled:
        raise HTTPException(status_code=404, detail="Faucet is disabled")
    with _market_lock:
        market.runtime.fund(request.address, int(request.amount))
    logger.info("faucet_funded", address=request.address, amount=request.amount)
    return StatusResponse()

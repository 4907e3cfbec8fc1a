"""Pydantic models for market requests.

Amounts travel as uint256 decimal strings, addresses as 0x-prefixed hex.
"""

from pydantic import BaseModel, Field

from bonding.models.types import Address, Uint256


class BuyRequest(BaseModel):
    """Buy `amount` tokens, attaching `value` as payment."""

    caller: Address
    amount: Uint256 = Field(description="Tokens to mint, 18-decimal units")
    value: Uint256 = Field(description="Attached payment; overpayment is refunded")


class SellRequest(BaseModel):
    """Sell `amount` of the caller's tokens back to the curve."""

    caller: Address
    amount: Uint256 = Field(description="Tokens to burn, 18-decimal units")


class DonateRequest(BaseModel):
    """Send value to the market without minting."""

    sender: Address
    value: Uint256


class WithdrawRequest(BaseModel):
    """Withdraw reserve surplus (owner only)."""

    caller: Address
    to: Address
    amount: Uint256


class UpdateFeeRequest(BaseModel):
    """Change the fee rate (owner only)."""

    caller: Address
    fee_bps: int = Field(alias="feeBps", ge=0)

    model_config = {"populate_by_name": True}


class UpdateTreasuryRequest(BaseModel):
    """Change the fee recipient (owner only)."""

    caller: Address
    treasury: Address


class TransferOwnershipRequest(BaseModel):
    """Hand admin rights to another address (owner only)."""

    caller: Address
    new_owner: Address = Field(alias="newOwner")

    model_config = {"populate_by_name": True}


class FaucetRequest(BaseModel):
    """Credit native value to an address (development only)."""

    address: Address
    amount: Uint256

"""Fee configuration for the market."""

from dataclasses import dataclass

from bonding.errors import FeeTooHigh, ZeroAddress
from bonding.models.types import is_zero_address, normalize_address

# Upper bound on the fee rate (500 bps = 5%)
MAX_FEE_BPS = 500


def validate_fee_bps(fee_bps: int) -> int:
    """Return fee_bps if it lies in [0, MAX_FEE_BPS].

    Raises:
        FeeTooHigh: If fee_bps exceeds MAX_FEE_BPS
        ValueError: If fee_bps is negative
    """
    if fee_bps < 0:
        raise ValueError(f"Fee cannot be negative: {fee_bps}")
    if fee_bps > MAX_FEE_BPS:
        raise FeeTooHigh(f"Fee {fee_bps} bps exceeds max {MAX_FEE_BPS} bps")
    return fee_bps


def validate_treasury(treasury: str) -> str:
    """Normalize a treasury address, rejecting the null address.

    Raises:
        ZeroAddress: If treasury is the null address
        ValueError: If treasury is not a valid address
    """
    address = normalize_address(treasury, validate=True)
    if is_zero_address(address):
        raise ZeroAddress("Treasury cannot be the zero address")
    return address


@dataclass
class FeeConfig:
    """Owner-controlled fee settings.

    Independent of the curve shape. Mutated only through the setters below,
    which re-validate on every change.

    Attributes:
        fee_bps: Fee rate in basis points, at most MAX_FEE_BPS
        treasury: Address that receives every fee
    """

    fee_bps: int
    treasury: str

    def __post_init__(self) -> None:
        self.fee_bps = validate_fee_bps(self.fee_bps)
        self.treasury = validate_treasury(self.treasury)

    def set_fee_bps(self, fee_bps: int) -> int:
        """Replace the fee rate; returns the previous one."""
        previous = self.fee_bps
        self.fee_bps = validate_fee_bps(fee_bps)
        return previous

    def set_treasury(self, treasury: str) -> str:
        """Replace the treasury; returns the previous one."""
        previous = self.treasury
        self.treasury = validate_treasury(treasury)
        return previous

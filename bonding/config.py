"""Market deployment configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

# Reference deployment: a = 3.96e6 subunits per unit^3, b = 1e14 subunits per unit
DEFAULT_CURVE_A = 3_960_000
DEFAULT_CURVE_B = 100_000_000_000_000
DEFAULT_FEE_BPS = 500

DEFAULT_MARKET_ADDRESS = "0x000000000000000000000000000000000000b0c0"
DEFAULT_OWNER = "0x00000000000000000000000000000000000000a1"
DEFAULT_TREASURY = "0x00000000000000000000000000000000000000a2"

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class MarketConfig:
    """Construction parameters for a market.

    Validation happens when the market is deployed; this dataclass only
    carries the values.

    Attributes:
        curve_a: Full quadratic coefficient (positive multiple of 3)
        curve_b: Base price in subunits
        fee_bps: Initial fee rate in basis points
        treasury: Initial fee recipient
        owner: Admin identity
        market_address: Address that holds the reserve
        token_name: Ledger token name
        token_symbol: Ledger token symbol
        faucet_enabled: Whether the HTTP service exposes /faucet
    """

    curve_a: int = DEFAULT_CURVE_A
    curve_b: int = DEFAULT_CURVE_B
    fee_bps: int = DEFAULT_FEE_BPS
    treasury: str = DEFAULT_TREASURY
    owner: str = DEFAULT_OWNER
    market_address: str = DEFAULT_MARKET_ADDRESS
    token_name: str = "Bonding Curve Token"
    token_symbol: str = "BCT"
    faucet_enabled: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> MarketConfig:
        """Read overrides from BONDING_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a numeric variable is not an integer
        """
        env = os.environ if environ is None else environ
        return cls(
            curve_a=int(env.get("BONDING_CURVE_A", DEFAULT_CURVE_A)),
            curve_b=int(env.get("BONDING_CURVE_B", DEFAULT_CURVE_B)),
            fee_bps=int(env.get("BONDING_FEE_BPS", DEFAULT_FEE_BPS)),
            treasury=env.get("BONDING_TREASURY", DEFAULT_TREASURY),
            owner=env.get("BONDING_OWNER", DEFAULT_OWNER),
            market_address=env.get("BONDING_MARKET_ADDRESS", DEFAULT_MARKET_ADDRESS),
            token_name=env.get("BONDING_TOKEN_NAME", "Bonding Curve Token"),
            token_symbol=env.get("BONDING_TOKEN_SYMBOL", "BCT"),
            faucet_enabled=env.get("BONDING_FAUCET_ENABLED", "false").lower() in _TRUTHY,
        )


# Default configuration instance
DEFAULT_MARKET_CONFIG = MarketConfig()


@lru_cache(maxsize=1)
def get_environment_config() -> MarketConfig:
    """MarketConfig read from the process environment, loaded once."""
    return MarketConfig.from_env()

"""Test helpers module for shared test utilities.

- constants: identities and reference curve values
- factories: market construction helpers
"""

from tests.helpers.constants import (
    A_FULL,
    A_THIRD,
    ALICE,
    BASE_PRICE,
    BOB,
    CAROL,
    COST_FIRST_UNIT,
    COST_SECOND_UNIT,
    FEE_BPS,
    FEE_FIRST_UNIT,
    MALLORY,
    MARKET,
    ONE,
    OWNER,
    TRADER_FUNDING,
    TREASURY,
    ZERO,
)
from tests.helpers.factories import RecordingPayee, buy_exact, make_market

__all__ = [
    # Identities
    "ALICE",
    "BOB",
    "CAROL",
    "MALLORY",
    "MARKET",
    "OWNER",
    "TREASURY",
    "ZERO",
    # Curve values
    "A_FULL",
    "A_THIRD",
    "BASE_PRICE",
    "COST_FIRST_UNIT",
    "COST_SECOND_UNIT",
    "FEE_BPS",
    "FEE_FIRST_UNIT",
    "ONE",
    "TRADER_FUNDING",
    # Factories
    "RecordingPayee",
    "buy_exact",
    "make_market",
]

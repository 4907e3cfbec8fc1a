"""Pydantic models and identity helpers for the market."""

from bonding.models.types import (
    ZERO_ADDRESS,
    Address,
    Uint256,
    is_valid_address,
    is_zero_address,
    normalize_address,
)

__all__ = [
    # Types
    "Address",
    "Uint256",
    "ZERO_ADDRESS",
    # Helpers
    "normalize_address",
    "is_valid_address",
    "is_zero_address",
]

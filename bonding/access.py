"""Single-owner access control."""

from __future__ import annotations

from typing import Any

from bonding.errors import NotOwner, ZeroAddress
from bonding.models.types import is_zero_address, normalize_address


class Ownable:
    """Holds the owner identity and checks it on admin calls."""

    def __init__(self, owner: str) -> None:
        self._owner = _require_owner_address(owner)

    @property
    def owner(self) -> str:
        return self._owner

    def require_owner(self, caller: str) -> None:
        """Raise NotOwner unless caller is the owner."""
        if normalize_address(caller) != self._owner:
            raise NotOwner(f"{normalize_address(caller)} is not the owner")

    def transfer_ownership(self, new_owner: str) -> str:
        """Replace the owner; returns the previous one.

        Callers must check require_owner first.
        """
        previous = self._owner
        self._owner = _require_owner_address(new_owner)
        return previous

    def snapshot(self) -> Any:
        return self._owner

    def restore(self, state: Any) -> None:
        self._owner = state


def _require_owner_address(owner: str) -> str:
    address = normalize_address(owner, validate=True)
    if is_zero_address(address):
        raise ZeroAddress("Owner cannot be the zero address")
    return address

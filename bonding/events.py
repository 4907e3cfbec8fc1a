"""Event records emitted by the market and its token ledger.

Records are appended to the runtime's event log after the operation's
transfers succeed; a rolled-back operation leaves no record behind.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Event:
    """Base class for event records."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """Serialize as {"event": name, **fields}."""
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True)
class Bought(Event):
    buyer: str
    amount: int
    base_cost: int
    fee: int


@dataclass(frozen=True)
class Sold(Event):
    seller: str
    amount: int
    net_refund: int
    fee: int


@dataclass(frozen=True)
class Withdrawn(Event):
    to: str
    amount: int


@dataclass(frozen=True)
class FeeUpdated(Event):
    old_fee_bps: int
    new_fee_bps: int


@dataclass(frozen=True)
class TreasuryUpdated(Event):
    old_treasury: str
    new_treasury: str


@dataclass(frozen=True)
class OwnershipTransferred(Event):
    previous_owner: str
    new_owner: str


# Token ledger records (mint is a Transfer from the zero address, burn a Transfer to it)


@dataclass(frozen=True)
class Transfer(Event):
    sender: str
    recipient: str
    amount: int


@dataclass(frozen=True)
class Approval(Event):
    owner: str
    spender: str
    amount: int

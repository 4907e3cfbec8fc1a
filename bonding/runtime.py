"""In-process hosting runtime.

The runtime stands in for the ledger host the market is deployed on. It owns:
- native value balances per address (the market's own balance is its reserve)
- payee hooks, i.e. code that runs when an address receives value
- the append-only event log
- atomic transactions over itself and every registered stateful participant

A payee hook receives (sender, amount) and may call back into any market,
which is how re-entrancy is modelled. Returning False or raising rejects the
transfer; the hook's own effects are rolled back and the sender sees
TransferFailed.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

import structlog

from bonding.errors import InsufficientNativeBalance, TransferFailed
from bonding.events import Event
from bonding.models.types import normalize_address
from bonding.safe_int import S

logger = structlog.get_logger()

PayeeHook = Callable[[str, int], bool | None]

E = TypeVar("E", bound=Event)


class Stateful(Protocol):
    """State that must roll back together with the runtime."""

    def snapshot(self) -> Any:
        """Return an opaque copy of the current state."""
        ...

    def restore(self, state: Any) -> None:
        """Reinstate a state previously returned by snapshot()."""
        ...


@dataclass(frozen=True)
class _Checkpoint:
    native: dict[str, int]
    event_count: int
    participants: list[tuple[Stateful, Any]]


class Runtime:
    """Native value, payee code, event log and atomic transactions."""

    def __init__(self) -> None:
        self._native: dict[str, int] = {}
        self._payees: dict[str, PayeeHook] = {}
        self._events: list[Event] = []
        self._participants: list[Stateful] = []

    # --- Registration ---

    def register_state(self, participant: Stateful) -> None:
        """Include participant in every subsequent transaction checkpoint."""
        self._participants.append(participant)

    def register_payee(self, address: str, hook: PayeeHook) -> None:
        """Install code at address that runs on each incoming value transfer."""
        self._payees[normalize_address(address)] = hook

    # --- Native value ---

    def native_balance(self, address: str) -> int:
        return self._native.get(normalize_address(address), 0)

    def fund(self, address: str, amount: int) -> None:
        """Credit native value out of thin air (genesis allocation or faucet).

        Raises:
            Uint256Overflow: If amount is negative or the balance overflows
        """
        addr = normalize_address(address)
        self._native[addr] = (S(self._native.get(addr, 0)) + S(amount)).value
        logger.debug("native_funded", address=addr, amount=amount)

    def attach_value(self, sender: str, recipient: str, amount: int) -> None:
        """Move value attached to a call into the callee. No hook runs.

        Raises:
            InsufficientNativeBalance: If sender cannot cover amount
            Uint256Overflow: If amount is negative
        """
        self._move(normalize_address(sender), normalize_address(recipient), amount)

    def transfer_value(self, sender: str, recipient: str, amount: int) -> None:
        """Send value and run the recipient's hook, if it has one.

        Raises:
            InsufficientNativeBalance: If sender cannot cover amount
            Uint256Overflow: If amount is negative
            TransferFailed: If the recipient hook returns False or raises
        """
        src = normalize_address(sender)
        dst = normalize_address(recipient)
        self._move(src, dst, amount)

        hook = self._payees.get(dst)
        if hook is None:
            return

        try:
            with self.transaction():
                accepted = hook(src, amount)
                if accepted is False:
                    raise TransferFailed(f"Payee {dst} rejected {amount} from {src}")
        except TransferFailed:
            logger.warning("value_transfer_rejected", sender=src, recipient=dst, amount=amount)
            raise
        except Exception as err:
            logger.warning(
                "value_transfer_reverted",
                sender=src,
                recipient=dst,
                amount=amount,
                error=type(err).__name__,
            )
            raise TransferFailed(f"Payee {dst} reverted receiving {amount}: {err}") from err

    def _move(self, src: str, dst: str, amount: int) -> None:
        amount = S(amount).value
        available = self._native.get(src, 0)
        if available < amount:
            raise InsufficientNativeBalance(
                f"{src} holds {available}, needs {amount}"
            )
        self._native[src] = (S(available) - amount).value
        self._native[dst] = (S(self._native.get(dst, 0)) + amount).value

    # --- Events ---

    def emit(self, event: Event) -> None:
        self._events.append(event)

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    def events_of(self, event_type: type[E]) -> list[E]:
        """All logged events of the given type, oldest first."""
        return [e for e in self._events if isinstance(e, event_type)]

    # --- Transactions ---

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the body atomically.

        On any exception the runtime and every registered participant are put
        back exactly as they were on entry, then the exception propagates.
        Transactions nest; an inner rollback leaves the outer body running.
        """
        checkpoint = self._checkpoint()
        try:
            yield
        except BaseException:
            self._rollback(checkpoint)
            raise

    def _checkpoint(self) -> _Checkpoint:
        return _Checkpoint(
            native=dict(self._native),
            event_count=len(self._events),
            participants=[(p, p.snapshot()) for p in self._participants],
        )

    def _rollback(self, checkpoint: _Checkpoint) -> None:
        self._native = dict(checkpoint.native)
        del self._events[checkpoint.event_count :]
        for participant, state in checkpoint.participants:
            participant.restore(state)

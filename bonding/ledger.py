"""Fungible token ledger.

The market only needs mint, burn, balance_of and total_supply (TokenLedger).
InMemoryTokenLedger adds the ERC-20 style transfer surface so holders can
move tokens between themselves; sum(balances) == total_supply always holds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from bonding.errors import InsufficientAllowance, InsufficientBalance, ZeroAddress
from bonding.events import Approval, Transfer
from bonding.models.types import ZERO_ADDRESS, is_zero_address, normalize_address
from bonding.safe_int import S

if TYPE_CHECKING:
    from bonding.runtime import Runtime

TOKEN_DECIMALS = 18


class TokenLedger(Protocol):
    """Ledger interface the market calls into."""

    def mint(self, to: str, amount: int) -> None: ...

    def burn(self, holder: str, amount: int) -> None: ...

    def balance_of(self, holder: str) -> int: ...

    def total_supply(self) -> int: ...


class InMemoryTokenLedger:
    """Balance mapping with ERC-20 semantics.

    Records Transfer/Approval events on the runtime when one is given.
    Registered with the runtime as a stateful participant so a reverted
    operation also reverts its mints, burns and transfers.

    Attributes:
        name: Token name
        symbol: Token symbol
        decimals: Always 18
    """

    decimals = TOKEN_DECIMALS

    def __init__(self, name: str, symbol: str, runtime: Runtime | None = None) -> None:
        self.name = name
        self.symbol = symbol
        self._runtime = runtime
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._total_supply = 0
        if runtime is not None:
            runtime.register_state(self)

    # --- Reads ---

    def balance_of(self, holder: str) -> int:
        return self._balances.get(normalize_address(holder), 0)

    def total_supply(self) -> int:
        return self._total_supply

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def holders(self) -> dict[str, int]:
        """Non-zero balances by holder."""
        return {holder: bal for holder, bal in self._balances.items() if bal > 0}

    # --- Supply changes ---

    def mint(self, to: str, amount: int) -> None:
        """Create amount tokens for to.

        Raises:
            ZeroAddress: If to is the null address
            Uint256Overflow: If amount is negative
        """
        amount = S(amount).value
        recipient = _require_address(to, "mint to")
        self._total_supply = (S(self._total_supply) + amount).value
        self._balances[recipient] = (S(self.balance_of(recipient)) + amount).value
        self._emit(Transfer(sender=ZERO_ADDRESS, recipient=recipient, amount=amount))

    def burn(self, holder: str, amount: int) -> None:
        """Destroy amount of holder's tokens.

        Raises:
            InsufficientBalance: If holder owns fewer than amount tokens
        """
        amount = S(amount).value
        account = normalize_address(holder)
        balance = self.balance_of(account)
        if balance < amount:
            raise InsufficientBalance(f"{account} holds {balance}, cannot burn {amount}")
        self._balances[account] = balance - amount
        self._total_supply = (S(self._total_supply) - amount).value
        self._emit(Transfer(sender=account, recipient=ZERO_ADDRESS, amount=amount))

    # --- Holder operations ---

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        """Move amount from sender to recipient.

        Raises:
            ZeroAddress: If recipient is the null address
            InsufficientBalance: If sender owns fewer than amount tokens
        """
        amount = S(amount).value
        src = normalize_address(sender)
        dst = _require_address(recipient, "transfer to")
        balance = self.balance_of(src)
        if balance < amount:
            raise InsufficientBalance(f"{src} holds {balance}, cannot transfer {amount}")
        self._balances[src] = balance - amount
        self._balances[dst] = (S(self.balance_of(dst)) + amount).value
        self._emit(Transfer(sender=src, recipient=dst, amount=amount))

    def approve(self, owner: str, spender: str, amount: int) -> None:
        """Set spender's allowance over owner's tokens to amount."""
        key = (normalize_address(owner), _require_address(spender, "approve"))
        self._allowances[key] = S(amount).value
        self._emit(Approval(owner=key[0], spender=key[1], amount=amount))

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        """Move amount from owner to recipient, spending spender's allowance.

        Raises:
            InsufficientAllowance: If the allowance is below amount
            InsufficientBalance: If owner owns fewer than amount tokens
        """
        amount = S(amount).value
        key = (normalize_address(owner), normalize_address(spender))
        allowed = self._allowances.get(key, 0)
        if allowed < amount:
            raise InsufficientAllowance(f"{key[1]} may spend {allowed} of {key[0]}, needs {amount}")
        self.transfer(key[0], recipient, amount)
        self._allowances[key] = allowed - amount

    # --- Runtime participation ---

    def snapshot(self) -> Any:
        return dict(self._balances), dict(self._allowances), self._total_supply

    def restore(self, state: Any) -> None:
        balances, allowances, total_supply = state
        self._balances = dict(balances)
        self._allowances = dict(allowances)
        self._total_supply = total_supply

    def _emit(self, event: Transfer | Approval) -> None:
        if self._runtime is not None:
            self._runtime.emit(event)


def _require_address(address: str, action: str) -> str:
    normalized = normalize_address(address)
    if is_zero_address(normalized):
        raise ZeroAddress(f"Cannot {action} the zero address")
    return normalized

"""Re-entrancy guard for mutating market operations."""

from __future__ import annotations

from types import TracebackType

from bonding.errors import ReentrantCall


class ReentrancyGuard:
    """Scoped mutual exclusion that rejects rather than waits.

    Usage:
        with self._guard:
            ...  # a nested `with self._guard` raises ReentrantCall

    The flag is cleared on every exit path, including exceptions.
    """

    __slots__ = ("_entered",)

    def __init__(self) -> None:
        self._entered = False

    @property
    def entered(self) -> bool:
        return self._entered

    def __enter__(self) -> ReentrancyGuard:
        if self._entered:
            raise ReentrantCall("Re-entrant call rejected")
        self._entered = True
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._entered = False

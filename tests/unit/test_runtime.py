"""Tests for the in-process runtime: value, payees, events, transactions."""

import pytest

from bonding.errors import InsufficientNativeBalance, TransferFailed
from bonding.events import Transfer, Withdrawn
from bonding.runtime import Runtime
from bonding.safe_int import Uint256Overflow
from tests.helpers import ALICE, BOB, RecordingPayee


class Counter:
    """Minimal stateful participant."""

    def __init__(self) -> None:
        self.value = 0

    def snapshot(self):
        return self.value

    def restore(self, state):
        self.value = state


class TestNativeValue:
    def test_fund_and_balance(self, runtime):
        runtime.fund(ALICE, 100)
        runtime.fund(ALICE, 50)
        assert runtime.native_balance(ALICE) == 150
        assert runtime.native_balance(BOB) == 0

    def test_attach_value_skips_hook(self, runtime):
        payee = RecordingPayee()
        runtime.register_payee(BOB, payee)
        runtime.fund(ALICE, 100)
        runtime.attach_value(ALICE, BOB, 40)
        assert runtime.native_balance(BOB) == 40
        assert payee.received == []

    def test_insufficient_native_balance(self, runtime):
        runtime.fund(ALICE, 10)
        with pytest.raises(InsufficientNativeBalance):
            runtime.transfer_value(ALICE, BOB, 11)
        assert runtime.native_balance(ALICE) == 10


class TestPayeeHooks:
    def test_hook_sees_sender_and_amount(self, runtime):
        payee = RecordingPayee()
        runtime.register_payee(BOB, payee)
        runtime.fund(ALICE, 100)
        runtime.transfer_value(ALICE, BOB, 25)
        assert payee.received == [(ALICE, 25)]
        assert runtime.native_balance(BOB) == 25

    def test_hook_returning_none_accepts(self, runtime):
        runtime.register_payee(BOB, lambda sender, amount: None)
        runtime.fund(ALICE, 100)
        runtime.transfer_value(ALICE, BOB, 25)
        assert runtime.native_balance(BOB) == 25

    def test_hook_returning_false_fails_transfer(self, runtime):
        runtime.register_payee(BOB, RecordingPayee(accept=False))
        runtime.fund(ALICE, 100)
        with pytest.raises(TransferFailed), runtime.transaction():
            runtime.transfer_value(ALICE, BOB, 25)
        assert runtime.native_balance(ALICE) == 100
        assert runtime.native_balance(BOB) == 0

    def test_hook_exception_wrapped(self, runtime):
        def explode(sender, amount):
            raise KeyError("boom")

        runtime.register_payee(BOB, explode)
        runtime.fund(ALICE, 100)
        with pytest.raises(TransferFailed) as exc_info:
            runtime.transfer_value(ALICE, BOB, 25)
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_rejected_hook_effects_roll_back(self, runtime):
        """Whatever the hook did before rejecting is undone."""
        counter = Counter()
        runtime.register_state(counter)

        def meddle(sender, amount):
            counter.value += 1
            runtime.emit(Withdrawn(to=sender, amount=amount))
            return False

        runtime.register_payee(BOB, meddle)
        runtime.fund(ALICE, 100)
        with pytest.raises(TransferFailed):
            runtime.transfer_value(ALICE, BOB, 25)
        assert counter.value == 0
        assert runtime.events == ()


class TestEvents:
    def test_emit_and_filter(self, runtime):
        first = Transfer(sender=ALICE, recipient=BOB, amount=1)
        second = Withdrawn(to=ALICE, amount=2)
        runtime.emit(first)
        runtime.emit(second)
        assert runtime.events == (first, second)
        assert runtime.events_of(Withdrawn) == [second]

    def test_event_to_dict(self):
        event = Withdrawn(to=ALICE, amount=7)
        assert event.to_dict() == {"event": "Withdrawn", "to": ALICE, "amount": 7}


class TestTransactions:
    def test_commit_keeps_changes(self, runtime):
        counter = Counter()
        runtime.register_state(counter)
        with runtime.transaction():
            runtime.fund(ALICE, 5)
            counter.value = 3
        assert runtime.native_balance(ALICE) == 5
        assert counter.value == 3

    def test_rollback_restores_everything(self, runtime):
        counter = Counter()
        runtime.register_state(counter)
        runtime.fund(ALICE, 5)
        with pytest.raises(ValueError), runtime.transaction():
            runtime.fund(ALICE, 5)
            runtime.emit(Withdrawn(to=ALICE, amount=1))
            counter.value = 9
            raise ValueError("abort")
        assert runtime.native_balance(ALICE) == 5
        assert runtime.events == ()
        assert counter.value == 0

    def test_inner_rollback_leaves_outer_running(self, runtime):
        with runtime.transaction():
            runtime.fund(ALICE, 1)
            with pytest.raises(ValueError), runtime.transaction():
                runtime.fund(BOB, 1)
                raise ValueError("inner")
            runtime.fund(ALICE, 1)
        assert runtime.native_balance(ALICE) == 2
        assert runtime.native_balance(BOB) == 0


def test_fresh_runtime_is_empty():
    runtime = Runtime()
    assert runtime.events == ()
    assert runtime.native_balance(ALICE) == 0


class TestNegativeValue:
    """Amounts are uint256; negatives never move value backwards."""

    def test_fund_rejects_negative(self, runtime):
        runtime.fund(ALICE, 100)
        with pytest.raises(Uint256Overflow):
            runtime.fund(ALICE, -50)
        assert runtime.native_balance(ALICE) == 100

    def test_transfer_rejects_negative(self, runtime):
        runtime.fund(BOB, 100)
        with pytest.raises(Uint256Overflow):
            runtime.transfer_value(ALICE, BOB, -40)
        assert runtime.native_balance(ALICE) == 0
        assert runtime.native_balance(BOB) == 100

    def test_attach_rejects_negative(self, runtime):
        runtime.fund(BOB, 100)
        with pytest.raises(Uint256Overflow):
            runtime.attach_value(ALICE, BOB, -40)
        assert runtime.native_balance(BOB) == 100

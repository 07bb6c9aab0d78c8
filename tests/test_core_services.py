from __future__ import annotations

import pytest

from amm_gateway.application.services.allowance_manager import AllowanceManager
from amm_gateway.application.services.asset_custodian import AssetCustodian
from amm_gateway.application.services.event_ledger import EventLedger
from amm_gateway.application.services.operation_scope import OperationScope
from amm_gateway.domain.entities.events import OwnershipTransferred
from amm_gateway.domain.exceptions import Reentrant, RefundFailed, TransferFailed
from amm_gateway.domain.services.reentrancy import GuardState, ReentrancyGuard

from fakes import ALICE, BOB, CORE, ROUTER, TOKEN_A, FakeEventSink, FakeLedger


def test_guard_transitions():
    guard = ReentrancyGuard()
    assert guard.state is GuardState.UNLOCKED

    guard.acquire()
    assert guard.locked
    with pytest.raises(Reentrant):
        guard.acquire()

    guard.release()
    assert guard.state is GuardState.UNLOCKED


def test_guard_hold_releases_on_error():
    guard = ReentrancyGuard()

    with pytest.raises(RuntimeError):
        with guard.hold():
            raise RuntimeError("boom")

    assert not guard.locked
    with guard.hold():
        assert guard.locked


def test_grant_resets_before_raising_under_strict_approvals():
    ledger = FakeLedger(strict_approvals=True)
    ledger.allowances[(TOKEN_A, CORE, ROUTER)] = 77
    manager = AllowanceManager(ledger=ledger, owner=CORE)

    assert ledger.approve(asset=TOKEN_A, owner=CORE, spender=ROUTER, amount=500) is False

    allowance = manager.grant(asset=TOKEN_A, spender=ROUTER, amount=500)

    assert allowance.amount == 500
    assert ledger.allowance(asset=TOKEN_A, owner=CORE, spender=ROUTER) == 500
    approvals = [kwargs["amount"] for name, kwargs in ledger.calls if name == "approve"]
    assert approvals[-2:] == [0, 500]


def test_grant_zero_only_resets():
    ledger = FakeLedger()
    ledger.allowances[(TOKEN_A, CORE, ROUTER)] = 5
    AllowanceManager(ledger=ledger, owner=CORE).grant(asset=TOKEN_A, spender=ROUTER, amount=0)

    assert ledger.allowance(asset=TOKEN_A, owner=CORE, spender=ROUTER) == 0
    assert [kwargs["amount"] for _, kwargs in ledger.calls] == [0]


def test_rejected_approve_is_transfer_failed():
    ledger = FakeLedger()
    ledger.reject_approvals = True

    with pytest.raises(TransferFailed):
        AllowanceManager(ledger=ledger, owner=CORE).grant(asset=TOKEN_A, spender=ROUTER, amount=1)


def test_revoke_skips_when_already_zero():
    ledger = FakeLedger()
    manager = AllowanceManager(ledger=ledger, owner=CORE)

    manager.revoke(asset=TOKEN_A, spender=ROUTER)
    assert ledger.calls == []

    ledger.allowances[(TOKEN_A, CORE, ROUTER)] = 3
    manager.revoke(asset=TOKEN_A, spender=ROUTER)
    assert manager.current(asset=TOKEN_A, spender=ROUTER).amount == 0


def test_pull_in_without_allowance_fails():
    ledger = FakeLedger()
    ledger.balances[(TOKEN_A, ALICE)] = 10

    with pytest.raises(TransferFailed):
        AssetCustodian(ledger=ledger, core_address=CORE).pull_in(asset=TOKEN_A, source=ALICE, amount=10)


def test_refund_unused_pushes_only_the_remainder():
    ledger = FakeLedger()
    ledger.balances[(TOKEN_A, CORE)] = 100
    custodian = AssetCustodian(ledger=ledger, core_address=CORE)

    assert custodian.refund_unused(asset=TOKEN_A, recipient=ALICE, supplied=100, used=100) == 0
    assert custodian.refund_unused(asset=TOKEN_A, recipient=ALICE, supplied=100, used=60) == 40
    assert ledger.balance_of(asset=TOKEN_A, holder=ALICE) == 40


def test_refund_excess_native_returns_only_amount_above_baseline():
    ledger = FakeLedger()
    ledger.native[CORE] = 25
    custodian = AssetCustodian(ledger=ledger, core_address=CORE)

    assert custodian.refund_excess_native(recipient=ALICE, baseline=10) == 15
    assert ledger.native_balance_of(holder=ALICE) == 15
    assert custodian.refund_excess_native(recipient=ALICE, baseline=10) == 0


def test_refund_excess_native_failure_is_refund_failed():
    ledger = FakeLedger()
    ledger.native[CORE] = 25
    ledger.reject_native_to.add(BOB)

    with pytest.raises(RefundFailed):
        AssetCustodian(ledger=ledger, core_address=CORE).refund_excess_native(recipient=BOB, baseline=0)


def test_operation_scope_publishes_on_commit_and_discards_on_rollback():
    ledger = FakeLedger()
    sink = FakeEventSink()
    events = EventLedger(sink=sink)
    scope = OperationScope(guard=ReentrancyGuard(), ledger=ledger, events=events)
    event = OwnershipTransferred(previous_owner=ALICE, new_owner=BOB)

    with pytest.raises(RuntimeError):
        with scope.run("test"):
            ledger.mint(asset=TOKEN_A, recipient=ALICE, amount=5)
            events.emit(event)
            raise RuntimeError("abort")

    assert ledger.balance_of(asset=TOKEN_A, holder=ALICE) == 0
    assert events.publish_pending() == []

    with scope.run("test"):
        events.emit(event)
    assert events.publish_pending() == []
    assert sink.events[-1] == event


def test_operation_scope_rejects_nested_run():
    ledger = FakeLedger()
    scope = OperationScope(guard=ReentrancyGuard(), ledger=ledger, events=EventLedger(sink=FakeEventSink()))

    with scope.run("outer"):
        with pytest.raises(Reentrant):
            with scope.run("inner"):
                pass
        ledger.mint(asset=TOKEN_A, recipient=ALICE, amount=1)

    assert ledger.balance_of(asset=TOKEN_A, holder=ALICE) == 1

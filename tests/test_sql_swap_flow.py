from __future__ import annotations

import httpx
import pytest

from amm_gateway.application.dto.liquidity import RemoveLiquidityInput
from amm_gateway.application.dto.swap import SwapInput
from amm_gateway.application.services.allowance_manager import AllowanceManager
from amm_gateway.application.services.asset_custodian import AssetCustodian
from amm_gateway.application.services.event_ledger import EventLedger
from amm_gateway.application.services.exchange_delegate import ExchangeDelegate
from amm_gateway.application.services.operation_scope import OperationScope
from amm_gateway.application.use_cases.remove_liquidity import RemoveLiquidityUseCase
from amm_gateway.application.use_cases.swap import SwapUseCase
from amm_gateway.domain.entities.swap import SwapKind
from amm_gateway.domain.exceptions import PairNotFound, SwapFailed
from amm_gateway.domain.services.reentrancy import ReentrancyGuard
from amm_gateway.infrastructure.clients.amm_router_client import AmmRouterClientSettings, HttpAmmRouterClient
from amm_gateway.infrastructure.db.engine import SqlConnectionScope, create_schema, get_engine
from amm_gateway.infrastructure.db.repositories.asset_ledger_repository import SqlAssetLedgerRepository
from amm_gateway.infrastructure.db.repositories.ledger_event_repository import SqlLedgerEventRepository

from fakes import ALICE, CORE, NOW, ROUTER, TOKEN_A, TOKEN_B, WRAPPED


class Stack:
    def __init__(self, tmp_path, handler):
        scope = SqlConnectionScope(get_engine(f"sqlite+pysqlite:///{tmp_path / 'flow.db'}"))
        create_schema(scope.engine)
        self.ledger = SqlAssetLedgerRepository(scope, strict_approvals=True)
        self.events = SqlLedgerEventRepository(scope)
        amm = HttpAmmRouterClient(
            AmmRouterClientSettings(
                api_base="http://amm.test",
                router_address=ROUTER,
                wrapped_native=WRAPPED,
                timeout_seconds=5,
            ),
            ledger=self.ledger,
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        event_ledger = EventLedger(sink=self.events)
        self.kwargs = {
            "scope": OperationScope(guard=ReentrancyGuard(), ledger=self.ledger, events=event_ledger),
            "custodian": AssetCustodian(ledger=self.ledger, core_address=CORE),
            "allowances": AllowanceManager(ledger=self.ledger, owner=CORE),
            "delegate": ExchangeDelegate(amm=amm, sender=CORE),
            "events": event_ledger,
            "clock": lambda: NOW,
        }


def _swap_input(**overrides) -> SwapInput:
    payload = {
        "caller": ALICE,
        "kind": SwapKind.TOKENS_FOR_EXACT_TOKENS,
        "path": (TOKEN_A, TOKEN_B),
        "amount": 95,
        "amount_limit": 120,
        "recipient": ALICE,
        "deadline": NOW + 10,
    }
    payload.update(overrides)
    return SwapInput(**payload)


def test_exact_output_swap_commits_across_ledger_and_event_tables(tmp_path):
    stack = Stack(tmp_path, lambda _request: httpx.Response(200, json={"amounts": ["100", "95"]}))
    stack.ledger.mint(asset=TOKEN_A, recipient=ALICE, amount=1_000)
    stack.ledger.approve(asset=TOKEN_A, owner=ALICE, spender=CORE, amount=1_000)
    stack.ledger.mint(asset=TOKEN_B, recipient=ROUTER, amount=1_000)
    # A leftover allowance the strict ledger would refuse to raise directly.
    stack.ledger.approve(asset=TOKEN_A, owner=CORE, spender=ROUTER, amount=3)

    output = SwapUseCase(**stack.kwargs).execute(_swap_input())

    assert output.refunded_in == 20
    assert stack.ledger.balance_of(asset=TOKEN_A, holder=ALICE) == 900
    assert stack.ledger.balance_of(asset=TOKEN_B, holder=ALICE) == 95
    assert stack.ledger.balance_of(asset=TOKEN_A, holder=CORE) == 0
    assert stack.ledger.allowance(asset=TOKEN_A, owner=CORE, spender=ROUTER) == 0
    records = stack.events.list_recent(limit=5)
    assert [record.name for record in records] == ["SwapExecuted"]
    assert records[0].event.amount_in == 100


def test_failed_amm_call_leaves_database_untouched(tmp_path):
    stack = Stack(tmp_path, lambda _request: httpx.Response(503, json={"detail": "busy"}))
    stack.ledger.mint(asset=TOKEN_A, recipient=ALICE, amount=1_000)
    stack.ledger.approve(asset=TOKEN_A, owner=ALICE, spender=CORE, amount=1_000)

    with pytest.raises(SwapFailed):
        SwapUseCase(**stack.kwargs).execute(_swap_input())

    assert stack.ledger.balance_of(asset=TOKEN_A, holder=ALICE) == 1_000
    assert stack.ledger.allowance(asset=TOKEN_A, owner=ALICE, spender=CORE) == 1_000
    assert stack.ledger.allowance(asset=TOKEN_A, owner=CORE, spender=ROUTER) == 0
    assert stack.events.list_recent(limit=5) == []


def test_remove_liquidity_for_unknown_pair(tmp_path):
    stack = Stack(tmp_path, lambda _request: httpx.Response(200, json={"pair": None}))

    with pytest.raises(PairNotFound):
        RemoveLiquidityUseCase(**stack.kwargs).execute(
            RemoveLiquidityInput(
                caller=ALICE,
                token_a=TOKEN_A,
                token_b=TOKEN_B,
                liquidity=1,
                amount_a_min=0,
                amount_b_min=0,
                recipient=ALICE,
                deadline=NOW,
            )
        )

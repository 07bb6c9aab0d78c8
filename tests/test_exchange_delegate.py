from __future__ import annotations

import pytest

from amm_gateway.application.services.exchange_delegate import ExchangeDelegate
from amm_gateway.domain.entities.execution import DelegateResult, SwapExecution
from amm_gateway.domain.entities.swap import SwapKind
from amm_gateway.domain.exceptions import AddLiquidityFailed, RemoveLiquidityFailed, SwapFailed

from fakes import ALICE, CORE, NOW, ROUTER, TOKEN_A, TOKEN_B, WRAPPED


class ScriptedAmm:
    router_address = ROUTER
    wrapped_native = WRAPPED

    def __init__(self, result=None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def __getattr__(self, name: str):
        def call(**kwargs):
            self.calls.append((name, kwargs))
            if self.error is not None:
                raise self.error
            return self.result

        return call


def _swap(delegate: ExchangeDelegate, kind: SwapKind, **overrides) -> DelegateResult:
    payload = {
        "kind": kind,
        "path": [TOKEN_A, TOKEN_B],
        "amount": 100,
        "amount_limit": 90,
        "to": ALICE,
        "deadline": NOW,
        "value": 0,
    }
    payload.update(overrides)
    return delegate.swap(**payload)


@pytest.mark.parametrize(
    "kind,method,amount_key,limit_key",
    [
        (SwapKind.EXACT_TOKENS_FOR_TOKENS, "swap_exact_tokens_for_tokens", "amount_in", "amount_out_min"),
        (SwapKind.TOKENS_FOR_EXACT_TOKENS, "swap_tokens_for_exact_tokens", "amount_out", "amount_in_max"),
        (SwapKind.TOKENS_FOR_EXACT_ETH, "swap_tokens_for_exact_eth", "amount_out", "amount_in_max"),
        (SwapKind.EXACT_TOKENS_FOR_ETH, "swap_exact_tokens_for_eth", "amount_in", "amount_out_min"),
    ],
)
def test_token_in_swaps_dispatch_with_bounds(kind, method, amount_key, limit_key):
    amm = ScriptedAmm(result=[100, 95])
    result = _swap(ExchangeDelegate(amm=amm, sender=CORE), kind)

    assert result.ok
    assert result.unwrap() == SwapExecution(amounts=(100, 95))
    name, kwargs = amm.calls[0]
    assert name == method
    assert kwargs[amount_key] == 100
    assert kwargs[limit_key] == 90
    assert kwargs["sender"] == CORE


def test_native_in_swaps_forward_value():
    amm = ScriptedAmm(result=[100, 95])
    delegate = ExchangeDelegate(amm=amm, sender=CORE)

    _swap(delegate, SwapKind.EXACT_ETH_FOR_TOKENS, value=100)
    _swap(delegate, SwapKind.ETH_FOR_EXACT_TOKENS, amount=95, value=150)

    assert amm.calls[0][0] == "swap_exact_eth_for_tokens"
    assert amm.calls[0][1]["value"] == 100
    assert amm.calls[1][0] == "swap_eth_for_exact_tokens"
    assert amm.calls[1][1]["value"] == 150
    assert amm.calls[1][1]["amount_out"] == 95


def test_raised_error_is_replaced_by_swap_failed():
    amm = ScriptedAmm(error=RuntimeError("UniswapV2Router: EXPIRED"))
    result = _swap(ExchangeDelegate(amm=amm, sender=CORE), SwapKind.EXACT_TOKENS_FOR_TOKENS)

    assert not result.ok
    assert isinstance(result.error, SwapFailed)
    assert "EXPIRED" not in str(result.error)
    with pytest.raises(SwapFailed):
        result.unwrap()


@pytest.mark.parametrize("raw", [[100], [100, -1], None, ["x", "y"]])
def test_malformed_swap_results_are_failures(raw):
    result = _swap(ExchangeDelegate(amm=ScriptedAmm(result=raw), sender=CORE), SwapKind.EXACT_TOKENS_FOR_TOKENS)
    assert isinstance(result.error, SwapFailed)


def test_liquidity_calls_map_to_their_errors():
    delegate = ExchangeDelegate(amm=ScriptedAmm(error=ValueError("nope")), sender=CORE)

    added = delegate.add_liquidity(
        token_a=TOKEN_A,
        token_b=TOKEN_B,
        amount_a_desired=1,
        amount_b_desired=1,
        amount_a_min=0,
        amount_b_min=0,
        to=ALICE,
        deadline=NOW,
    )
    added_eth = delegate.add_liquidity_eth(
        token=TOKEN_A,
        value=1,
        amount_token_desired=1,
        amount_token_min=0,
        amount_eth_min=0,
        to=ALICE,
        deadline=NOW,
    )
    removed = delegate.remove_liquidity(
        token_a=TOKEN_A,
        token_b=TOKEN_B,
        liquidity=1,
        amount_a_min=0,
        amount_b_min=0,
        to=ALICE,
        deadline=NOW,
    )

    assert isinstance(added.error, AddLiquidityFailed)
    assert isinstance(added_eth.error, AddLiquidityFailed)
    assert isinstance(removed.error, RemoveLiquidityFailed)
    assert isinstance(delegate.get_pair(token_a=TOKEN_A, token_b=TOKEN_B).error, RemoveLiquidityFailed)


def test_liquidity_result_shape_is_checked():
    delegate = ExchangeDelegate(amm=ScriptedAmm(result=(10, 20)), sender=CORE)

    result = delegate.add_liquidity(
        token_a=TOKEN_A,
        token_b=TOKEN_B,
        amount_a_desired=10,
        amount_b_desired=20,
        amount_a_min=0,
        amount_b_min=0,
        to=ALICE,
        deadline=NOW,
    )

    assert isinstance(result.error, AddLiquidityFailed)


def test_spender_and_wrapped_native_come_from_the_amm():
    delegate = ExchangeDelegate(amm=ScriptedAmm(), sender=CORE)
    assert delegate.spender == ROUTER
    assert delegate.wrapped_native == WRAPPED

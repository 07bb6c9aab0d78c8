from __future__ import annotations

import logging
from typing import Callable, Sequence, TypeVar

from amm_gateway.application.ports.amm_router_port import AmmRouterPort
from amm_gateway.domain.entities.execution import (
    DelegateResult,
    LiquidityExecution,
    RemovalExecution,
    SwapExecution,
)
from amm_gateway.domain.entities.swap import SwapKind
from amm_gateway.domain.exceptions import (
    AddLiquidityFailed,
    DomainError,
    RemoveLiquidityFailed,
    SwapFailed,
)


logger = logging.getLogger(__name__)

TResult = TypeVar("TResult")


class MalformedAmmResult(ValueError):
    pass


def _to_swap_execution(raw, path_length: int) -> SwapExecution:
    amounts = tuple(int(value) for value in raw)
    if len(amounts) != path_length:
        raise MalformedAmmResult(f"expected {path_length} amounts, got {len(amounts)}")
    if any(value < 0 for value in amounts):
        raise MalformedAmmResult("negative amount in swap result")
    return SwapExecution(amounts=amounts)


def _to_liquidity_execution(raw) -> LiquidityExecution:
    amount_a, amount_b, liquidity = (int(value) for value in raw)
    if amount_a < 0 or amount_b < 0 or liquidity < 0:
        raise MalformedAmmResult("negative amount in add-liquidity result")
    return LiquidityExecution(amount_a=amount_a, amount_b=amount_b, liquidity=liquidity)


def _to_removal_execution(raw) -> RemovalExecution:
    amount_a, amount_b = (int(value) for value in raw)
    if amount_a < 0 or amount_b < 0:
        raise MalformedAmmResult("negative amount in remove-liquidity result")
    return RemovalExecution(amount_a=amount_a, amount_b=amount_b)


class ExchangeDelegate:
    """Failure boundary around the AMM service.

    Every call returns a ``DelegateResult``; whatever the AMM raised is logged and
    replaced by the domain error of the operation.
    """

    def __init__(self, *, amm: AmmRouterPort, sender: str):
        self._amm = amm
        self._sender = sender

    @property
    def spender(self) -> str:
        return self._amm.router_address

    @property
    def wrapped_native(self) -> str:
        return self._amm.wrapped_native

    def get_pair(self, *, token_a: str, token_b: str) -> DelegateResult[str | None]:
        return self._guarded(
            "get_pair",
            lambda: self._amm.get_pair(token_a=token_a, token_b=token_b),
            RemoveLiquidityFailed("Pair lookup failed."),
        )

    def swap(
        self,
        *,
        kind: SwapKind,
        path: Sequence[str],
        amount: int,
        amount_limit: int,
        to: str,
        deadline: int,
        value: int = 0,
    ) -> DelegateResult[SwapExecution]:
        common = {"sender": self._sender, "path": list(path), "to": to, "deadline": deadline}
        if kind is SwapKind.EXACT_TOKENS_FOR_TOKENS:
            call = lambda: self._amm.swap_exact_tokens_for_tokens(
                amount_in=amount, amount_out_min=amount_limit, **common
            )
        elif kind is SwapKind.TOKENS_FOR_EXACT_TOKENS:
            call = lambda: self._amm.swap_tokens_for_exact_tokens(
                amount_out=amount, amount_in_max=amount_limit, **common
            )
        elif kind is SwapKind.EXACT_ETH_FOR_TOKENS:
            call = lambda: self._amm.swap_exact_eth_for_tokens(
                value=value, amount_out_min=amount_limit, **common
            )
        elif kind is SwapKind.TOKENS_FOR_EXACT_ETH:
            call = lambda: self._amm.swap_tokens_for_exact_eth(
                amount_out=amount, amount_in_max=amount_limit, **common
            )
        elif kind is SwapKind.EXACT_TOKENS_FOR_ETH:
            call = lambda: self._amm.swap_exact_tokens_for_eth(
                amount_in=amount, amount_out_min=amount_limit, **common
            )
        elif kind is SwapKind.ETH_FOR_EXACT_TOKENS:
            # The whole attached value is forwarded; the AMM returns what it does not spend.
            call = lambda: self._amm.swap_eth_for_exact_tokens(
                value=value, amount_out=amount, **common
            )
        else:
            raise ValueError(f"Unsupported swap kind: {kind}")

        return self._guarded(
            f"swap:{kind.value}",
            lambda: _to_swap_execution(call(), len(path)),
            SwapFailed("Swap failed."),
        )

    def add_liquidity(
        self,
        *,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> DelegateResult[LiquidityExecution]:
        return self._guarded(
            "add_liquidity",
            lambda: _to_liquidity_execution(
                self._amm.add_liquidity(
                    sender=self._sender,
                    token_a=token_a,
                    token_b=token_b,
                    amount_a_desired=amount_a_desired,
                    amount_b_desired=amount_b_desired,
                    amount_a_min=amount_a_min,
                    amount_b_min=amount_b_min,
                    to=to,
                    deadline=deadline,
                )
            ),
            AddLiquidityFailed("Add liquidity failed."),
        )

    def add_liquidity_eth(
        self,
        *,
        token: str,
        value: int,
        amount_token_desired: int,
        amount_token_min: int,
        amount_eth_min: int,
        to: str,
        deadline: int,
    ) -> DelegateResult[LiquidityExecution]:
        return self._guarded(
            "add_liquidity_eth",
            lambda: _to_liquidity_execution(
                self._amm.add_liquidity_eth(
                    sender=self._sender,
                    value=value,
                    token=token,
                    amount_token_desired=amount_token_desired,
                    amount_token_min=amount_token_min,
                    amount_eth_min=amount_eth_min,
                    to=to,
                    deadline=deadline,
                )
            ),
            AddLiquidityFailed("Add liquidity failed."),
        )

    def remove_liquidity(
        self,
        *,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> DelegateResult[RemovalExecution]:
        return self._guarded(
            "remove_liquidity",
            lambda: _to_removal_execution(
                self._amm.remove_liquidity(
                    sender=self._sender,
                    token_a=token_a,
                    token_b=token_b,
                    liquidity=liquidity,
                    amount_a_min=amount_a_min,
                    amount_b_min=amount_b_min,
                    to=to,
                    deadline=deadline,
                )
            ),
            RemoveLiquidityFailed("Remove liquidity failed."),
        )

    def _guarded(
        self,
        operation: str,
        call: Callable[[], TResult],
        error: DomainError,
    ) -> DelegateResult[TResult]:
        try:
            value = call()
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "exchange_delegate: failed operation=%s error_type=%s detail=%s",
                operation,
                type(exc).__name__,
                exc,
            )
            return DelegateResult.failure(error)
        return DelegateResult.success(value)

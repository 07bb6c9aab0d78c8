from __future__ import annotations

from dataclasses import dataclass

from amm_gateway.domain.entities.swap import SwapKind


@dataclass(frozen=True)
class SwapInput:
    caller: str
    kind: SwapKind
    path: tuple[str, ...]
    amount: int
    amount_limit: int
    recipient: str
    deadline: int
    value: int = 0


@dataclass(frozen=True)
class SwapOutput:
    kind: SwapKind
    amounts: tuple[int, ...]
    amount_in: int
    amount_out: int
    refunded_in: int
    native_refunded: int

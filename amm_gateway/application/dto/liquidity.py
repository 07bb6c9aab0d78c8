from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AddLiquidityInput:
    caller: str
    token_a: str
    token_b: str
    amount_a_desired: int
    amount_b_desired: int
    amount_a_min: int
    amount_b_min: int
    recipient: str
    deadline: int


@dataclass(frozen=True)
class AddLiquidityETHInput:
    caller: str
    token: str
    amount_token_desired: int
    amount_token_min: int
    amount_eth_min: int
    value: int
    recipient: str
    deadline: int


@dataclass(frozen=True)
class AddLiquidityOutput:
    token_a: str
    token_b: str
    amount_a: int
    amount_b: int
    liquidity: int
    refunded_a: int
    refunded_b: int


@dataclass(frozen=True)
class RemoveLiquidityInput:
    caller: str
    token_a: str
    token_b: str
    liquidity: int
    amount_a_min: int
    amount_b_min: int
    recipient: str
    deadline: int


@dataclass(frozen=True)
class RemoveLiquidityOutput:
    pair: str
    amount_a: int
    amount_b: int
    liquidity: int

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Union


@dataclass(frozen=True)
class SwapExecuted:
    sender: str
    asset_in: str
    asset_out: str
    amount_in: int
    amount_out: int


@dataclass(frozen=True)
class LiquidityAdded:
    sender: str
    token_a: str
    token_b: str
    amount_a: int
    amount_b: int
    liquidity_minted: int


@dataclass(frozen=True)
class LiquidityRemoved:
    sender: str
    token_a: str
    token_b: str
    amount_a: int
    amount_b: int
    liquidity_burned: int


@dataclass(frozen=True)
class OwnershipTransferred:
    previous_owner: str
    new_owner: str


LedgerEvent = Union[SwapExecuted, LiquidityAdded, LiquidityRemoved, OwnershipTransferred]

EVENT_TYPES: dict[str, type] = {
    cls.__name__: cls for cls in (SwapExecuted, LiquidityAdded, LiquidityRemoved, OwnershipTransferred)
}


def event_name(event: LedgerEvent) -> str:
    return type(event).__name__


def event_payload(event: LedgerEvent) -> dict:
    # Amounts are serialized as strings so integers wider than 64 bits survive JSON.
    return {key: str(value) if isinstance(value, int) else value for key, value in asdict(event).items()}


def event_from_payload(name: str, payload: dict) -> LedgerEvent:
    cls = EVENT_TYPES.get(name)
    if cls is None:
        raise ValueError(f"Unknown event type: {name}")
    fields = cls.__dataclass_fields__
    values = {}
    for key, field in fields.items():
        raw = payload[key]
        values[key] = int(raw) if field.type == "int" else raw
    return cls(**values)

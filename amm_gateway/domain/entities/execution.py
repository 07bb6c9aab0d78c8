from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from amm_gateway.domain.exceptions import DomainError


TValue = TypeVar("TValue")


@dataclass(frozen=True)
class SwapExecution:
    amounts: tuple[int, ...]

    @property
    def amount_in(self) -> int:
        return self.amounts[0]

    @property
    def amount_out(self) -> int:
        return self.amounts[-1]


@dataclass(frozen=True)
class LiquidityExecution:
    amount_a: int
    amount_b: int
    liquidity: int


@dataclass(frozen=True)
class RemovalExecution:
    amount_a: int
    amount_b: int


@dataclass(frozen=True)
class DelegateResult(Generic[TValue]):
    """Outcome of a delegated AMM call: either a value or a remapped domain error."""

    value: TValue | None = None
    error: DomainError | None = None

    @classmethod
    def success(cls, value: TValue) -> DelegateResult[TValue]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> DelegateResult[TValue]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> TValue:
        if self.error is not None:
            raise self.error
        return self.value

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Allowance:
    asset: str
    owner: str
    spender: str
    amount: int

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RescueAssetInput:
    caller: str
    asset: str
    amount: int


@dataclass(frozen=True)
class RescueNativeInput:
    caller: str
    amount: int


@dataclass(frozen=True)
class RescueOutput:
    asset: str | None
    amount: int
    owner: str


@dataclass(frozen=True)
class TransferOwnershipInput:
    caller: str
    new_owner: str


@dataclass(frozen=True)
class TransferOwnershipOutput:
    previous_owner: str
    new_owner: str

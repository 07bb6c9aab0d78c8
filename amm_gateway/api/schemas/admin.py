from __future__ import annotations

from pydantic import BaseModel

from amm_gateway.api.schemas.common import Address


class RescueAssetRequest(BaseModel):
    asset: Address | None = None
    amount: int


class RescueNativeRequest(BaseModel):
    amount: int


class RescueResponse(BaseModel):
    asset: str | None
    amount: str
    owner: str


class TransferOwnershipRequest(BaseModel):
    new_owner: Address | None = None


class OwnerResponse(BaseModel):
    owner: str | None
    previous_owner: str | None = None

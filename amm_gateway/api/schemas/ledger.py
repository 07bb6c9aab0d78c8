from __future__ import annotations

from pydantic import BaseModel

from amm_gateway.api.schemas.common import Address


class ApproveRequest(BaseModel):
    asset: Address | None = None
    spender: Address | None = None
    amount: int


class AllowanceResponse(BaseModel):
    asset: str
    owner: str
    spender: str
    amount: str


class BalanceResponse(BaseModel):
    holder: str
    asset: str | None
    amount: str

from __future__ import annotations

from pydantic import BaseModel, Field

from amm_gateway.api.schemas.common import Address


class AddLiquidityRequest(BaseModel):
    token_a: Address | None = None
    token_b: Address | None = None
    amount_a_desired: int
    amount_b_desired: int
    amount_a_min: int = 0
    amount_b_min: int = 0
    recipient: Address | None = None
    deadline: int


class AddLiquidityETHRequest(BaseModel):
    token: Address | None = None
    amount_token_desired: int
    amount_token_min: int = 0
    amount_eth_min: int = 0
    value: int = Field(..., description="Native currency attached to the call.")
    recipient: Address | None = None
    deadline: int


class AddLiquidityResponse(BaseModel):
    token_a: str
    token_b: str
    amount_a: str
    amount_b: str
    liquidity: str
    refunded_a: str
    refunded_b: str


class RemoveLiquidityRequest(BaseModel):
    token_a: Address | None = None
    token_b: Address | None = None
    liquidity: int
    amount_a_min: int = 0
    amount_b_min: int = 0
    recipient: Address | None = None
    deadline: int


class RemoveLiquidityResponse(BaseModel):
    pair: str
    amount_a: str
    amount_b: str
    liquidity: str

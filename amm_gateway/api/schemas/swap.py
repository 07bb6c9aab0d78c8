from __future__ import annotations

from pydantic import BaseModel, Field

from amm_gateway.api.schemas.common import Address


class SwapRequest(BaseModel):
    path: list[Address] = Field(..., description="Assets from input to output, at least two.")
    amount: int = Field(..., description="Exact side: input for exact-in swaps, output for exact-out swaps.")
    amount_limit: int = Field(0, description="Minimum output (exact-in) or maximum input (exact-out).")
    recipient: Address | None = Field(None, description="Receiver of the output asset.")
    deadline: int = Field(..., description="Unix timestamp after which the swap is rejected.")
    value: int = Field(0, description="Native currency attached to the call (native-in swaps only).")


class SwapResponse(BaseModel):
    kind: str
    amounts: list[str]
    amount_in: str
    amount_out: str
    refunded_in: str
    native_refunded: str

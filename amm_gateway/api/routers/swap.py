from __future__ import annotations

from fastapi import APIRouter, Depends

from amm_gateway.api.auth import require_caller
from amm_gateway.api.deps import get_swap_use_case
from amm_gateway.api.errors import to_http_exception
from amm_gateway.api.schemas.swap import SwapRequest, SwapResponse
from amm_gateway.application.dto.swap import SwapInput
from amm_gateway.application.use_cases.swap import SwapUseCase
from amm_gateway.domain.entities.swap import SwapKind
from amm_gateway.domain.exceptions import DomainError


router = APIRouter()


@router.post("/v1/swaps/{kind}", response_model=SwapResponse)
def swap(
    kind: SwapKind,
    req: SwapRequest,
    caller: str = Depends(require_caller),
    use_case: SwapUseCase = Depends(get_swap_use_case),
):
    try:
        result = use_case.execute(
            SwapInput(
                caller=caller,
                kind=kind,
                path=tuple(req.path),
                amount=req.amount,
                amount_limit=req.amount_limit,
                recipient=req.recipient,
                deadline=req.deadline,
                value=req.value,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    return SwapResponse(
        kind=result.kind.value,
        amounts=[str(amount) for amount in result.amounts],
        amount_in=str(result.amount_in),
        amount_out=str(result.amount_out),
        refunded_in=str(result.refunded_in),
        native_refunded=str(result.native_refunded),
    )

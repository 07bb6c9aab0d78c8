from __future__ import annotations

from fastapi import APIRouter, Depends

from amm_gateway.api.auth import require_caller
from amm_gateway.api.deps import (
    get_add_liquidity_eth_use_case,
    get_add_liquidity_use_case,
    get_remove_liquidity_use_case,
)
from amm_gateway.api.errors import to_http_exception
from amm_gateway.api.schemas.liquidity import (
    AddLiquidityETHRequest,
    AddLiquidityRequest,
    AddLiquidityResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
)
from amm_gateway.application.dto.liquidity import (
    AddLiquidityETHInput,
    AddLiquidityInput,
    AddLiquidityOutput,
    RemoveLiquidityInput,
)
from amm_gateway.application.use_cases.add_liquidity import AddLiquidityETHUseCase, AddLiquidityUseCase
from amm_gateway.application.use_cases.remove_liquidity import RemoveLiquidityUseCase
from amm_gateway.domain.exceptions import DomainError


router = APIRouter()


def _to_add_response(result: AddLiquidityOutput) -> AddLiquidityResponse:
    return AddLiquidityResponse(
        token_a=result.token_a,
        token_b=result.token_b,
        amount_a=str(result.amount_a),
        amount_b=str(result.amount_b),
        liquidity=str(result.liquidity),
        refunded_a=str(result.refunded_a),
        refunded_b=str(result.refunded_b),
    )


@router.post("/v1/liquidity/add", response_model=AddLiquidityResponse)
def add_liquidity(
    req: AddLiquidityRequest,
    caller: str = Depends(require_caller),
    use_case: AddLiquidityUseCase = Depends(get_add_liquidity_use_case),
):
    try:
        result = use_case.execute(
            AddLiquidityInput(
                caller=caller,
                token_a=req.token_a,
                token_b=req.token_b,
                amount_a_desired=req.amount_a_desired,
                amount_b_desired=req.amount_b_desired,
                amount_a_min=req.amount_a_min,
                amount_b_min=req.amount_b_min,
                recipient=req.recipient,
                deadline=req.deadline,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_add_response(result)


@router.post("/v1/liquidity/add-eth", response_model=AddLiquidityResponse)
def add_liquidity_eth(
    req: AddLiquidityETHRequest,
    caller: str = Depends(require_caller),
    use_case: AddLiquidityETHUseCase = Depends(get_add_liquidity_eth_use_case),
):
    try:
        result = use_case.execute(
            AddLiquidityETHInput(
                caller=caller,
                token=req.token,
                amount_token_desired=req.amount_token_desired,
                amount_token_min=req.amount_token_min,
                amount_eth_min=req.amount_eth_min,
                value=req.value,
                recipient=req.recipient,
                deadline=req.deadline,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_add_response(result)


@router.post("/v1/liquidity/remove", response_model=RemoveLiquidityResponse)
def remove_liquidity(
    req: RemoveLiquidityRequest,
    caller: str = Depends(require_caller),
    use_case: RemoveLiquidityUseCase = Depends(get_remove_liquidity_use_case),
):
    try:
        result = use_case.execute(
            RemoveLiquidityInput(
                caller=caller,
                token_a=req.token_a,
                token_b=req.token_b,
                liquidity=req.liquidity,
                amount_a_min=req.amount_a_min,
                amount_b_min=req.amount_b_min,
                recipient=req.recipient,
                deadline=req.deadline,
            )
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc

    return RemoveLiquidityResponse(
        pair=result.pair,
        amount_a=str(result.amount_a),
        amount_b=str(result.amount_b),
        liquidity=str(result.liquidity),
    )

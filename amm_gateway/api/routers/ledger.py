from __future__ import annotations

from fastapi import APIRouter, Depends

from amm_gateway.api.auth import require_caller
from amm_gateway.api.deps import get_approve_spender_use_case, get_balance_use_case
from amm_gateway.api.errors import to_http_exception
from amm_gateway.api.schemas.ledger import AllowanceResponse, ApproveRequest, BalanceResponse
from amm_gateway.application.use_cases.ledger_accounts import ApproveSpenderUseCase, GetBalanceUseCase
from amm_gateway.domain.exceptions import DomainError


router = APIRouter()


@router.post("/v1/ledger/approve", response_model=AllowanceResponse)
def approve(
    req: ApproveRequest,
    caller: str = Depends(require_caller),
    use_case: ApproveSpenderUseCase = Depends(get_approve_spender_use_case),
):
    try:
        allowance = use_case.execute(caller=caller, asset=req.asset, spender=req.spender, amount=req.amount)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return AllowanceResponse(
        asset=allowance.asset,
        owner=allowance.owner,
        spender=allowance.spender,
        amount=str(allowance.amount),
    )


@router.get("/v1/ledger/balances/{holder}", response_model=BalanceResponse)
def get_balance(
    holder: str,
    asset: str | None = None,
    use_case: GetBalanceUseCase = Depends(get_balance_use_case),
):
    holder = holder.strip().lower()
    asset = asset.strip().lower() if asset else None
    try:
        amount = use_case.execute(holder=holder, asset=asset)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return BalanceResponse(holder=holder, asset=asset, amount=str(amount))

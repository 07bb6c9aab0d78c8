from __future__ import annotations

from fastapi import APIRouter, Depends

from amm_gateway.api.auth import require_caller
from amm_gateway.api.deps import (
    get_owner_use_case,
    get_rescue_asset_use_case,
    get_rescue_native_use_case,
    get_transfer_ownership_use_case,
)
from amm_gateway.api.errors import to_http_exception
from amm_gateway.api.schemas.admin import (
    OwnerResponse,
    RescueAssetRequest,
    RescueNativeRequest,
    RescueResponse,
    TransferOwnershipRequest,
)
from amm_gateway.application.dto.admin import (
    RescueAssetInput,
    RescueNativeInput,
    RescueOutput,
    TransferOwnershipInput,
)
from amm_gateway.application.use_cases.rescue import RescueAssetUseCase, RescueNativeUseCase
from amm_gateway.application.use_cases.transfer_ownership import GetOwnerUseCase, TransferOwnershipUseCase
from amm_gateway.domain.exceptions import DomainError


router = APIRouter()


def _to_rescue_response(result: RescueOutput) -> RescueResponse:
    return RescueResponse(asset=result.asset, amount=str(result.amount), owner=result.owner)


@router.post("/v1/admin/rescue/asset", response_model=RescueResponse)
def rescue_asset(
    req: RescueAssetRequest,
    caller: str = Depends(require_caller),
    use_case: RescueAssetUseCase = Depends(get_rescue_asset_use_case),
):
    try:
        result = use_case.execute(RescueAssetInput(caller=caller, asset=req.asset, amount=req.amount))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_rescue_response(result)


@router.post("/v1/admin/rescue/native", response_model=RescueResponse)
def rescue_native(
    req: RescueNativeRequest,
    caller: str = Depends(require_caller),
    use_case: RescueNativeUseCase = Depends(get_rescue_native_use_case),
):
    try:
        result = use_case.execute(RescueNativeInput(caller=caller, amount=req.amount))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return _to_rescue_response(result)


@router.post("/v1/admin/ownership", response_model=OwnerResponse)
def transfer_ownership(
    req: TransferOwnershipRequest,
    caller: str = Depends(require_caller),
    use_case: TransferOwnershipUseCase = Depends(get_transfer_ownership_use_case),
):
    try:
        result = use_case.execute(TransferOwnershipInput(caller=caller, new_owner=req.new_owner))
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return OwnerResponse(owner=result.new_owner, previous_owner=result.previous_owner)


@router.get("/v1/admin/owner", response_model=OwnerResponse)
def get_owner(use_case: GetOwnerUseCase = Depends(get_owner_use_case)):
    return OwnerResponse(owner=use_case.execute())

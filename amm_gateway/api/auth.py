from __future__ import annotations

from fastapi import Depends, Header, HTTPException

from amm_gateway.api.deps import get_token_service
from amm_gateway.application.ports.token_port import TokenPort
from amm_gateway.domain.services.request_validation import is_valid_address
from amm_gateway.shared.config import get_settings


def require_bearer_token(authorization: str = Header(...)) -> str:
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")
    return token


def require_caller(
    token: str = Depends(require_bearer_token),
    token_service: TokenPort = Depends(get_token_service),
) -> str:
    try:
        payload = token_service.decode_access_token(token=token)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    caller = payload.caller
    if not is_valid_address(caller):
        raise HTTPException(status_code=401, detail="Invalid token subject.")
    if caller == get_settings().core_address:
        raise HTTPException(status_code=403, detail="The core cannot act as a caller.")
    return caller

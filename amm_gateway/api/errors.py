from __future__ import annotations

from fastapi import HTTPException

from amm_gateway.domain.exceptions import (
    AddLiquidityFailed,
    DeadlinePassed,
    DomainError,
    InsufficientAmount,
    InsufficientLiquidity,
    InvalidParams,
    InvalidPath,
    PairNotFound,
    Reentrant,
    RefundFailed,
    RemoveLiquidityFailed,
    SwapFailed,
    TransferFailed,
    Unauthorized,
)


_STATUS_BY_ERROR: dict[type[DomainError], int] = {
    InvalidPath: 400,
    DeadlinePassed: 400,
    InsufficientAmount: 400,
    InvalidParams: 400,
    Unauthorized: 403,
    PairNotFound: 404,
    TransferFailed: 409,
    RefundFailed: 409,
    Reentrant: 409,
    InsufficientLiquidity: 422,
    SwapFailed: 502,
    AddLiquidityFailed: 502,
    RemoveLiquidityFailed: 502,
}


def to_http_exception(exc: DomainError) -> HTTPException:
    status_code = _STATUS_BY_ERROR.get(type(exc), 400)
    return HTTPException(
        status_code=status_code,
        detail={"error": type(exc).__name__, "message": str(exc)},
    )

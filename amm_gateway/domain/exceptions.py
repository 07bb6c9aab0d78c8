from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class InvalidPath(DomainError):
    """Swap path has fewer than two assets."""


class DeadlinePassed(DomainError):
    """Request deadline is earlier than the current time."""


class InsufficientAmount(DomainError):
    """Requested amount must be greater than zero."""


class InvalidParams(DomainError):
    """Address or token parameter is missing or malformed."""


class TransferFailed(DomainError):
    """Asset transfer or approval reported failure."""


class RefundFailed(DomainError):
    """Native currency refund reported failure."""


class SwapFailed(DomainError):
    """Delegated swap did not complete."""


class AddLiquidityFailed(DomainError):
    """Delegated add-liquidity did not complete."""


class RemoveLiquidityFailed(DomainError):
    """Delegated remove-liquidity did not complete."""


class PairNotFound(DomainError):
    """No share token exists for the requested pair."""


class InsufficientLiquidity(DomainError):
    """Caller holds fewer shares than requested."""


class Reentrant(DomainError):
    """Operation invoked while another one is in flight."""


class Unauthorized(DomainError):
    """Caller is not the owner."""

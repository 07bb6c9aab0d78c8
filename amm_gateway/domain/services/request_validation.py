from __future__ import annotations

import re
from typing import Sequence

from amm_gateway.domain.exceptions import DeadlinePassed, InsufficientAmount, InvalidParams, InvalidPath


ZERO_ADDRESS = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_address(value: str | None) -> bool:
    if not value or not isinstance(value, str):
        return False
    if not _ADDRESS_RE.match(value):
        return False
    return value.lower() != ZERO_ADDRESS


def normalize_address(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip().lower()


def require_address(value: str | None, *, field_name: str) -> None:
    if not is_valid_address(value):
        raise InvalidParams(f"{field_name} must be a non-zero address.")


def require_path(path: Sequence[str] | None) -> None:
    if path is None or len(path) < 2:
        raise InvalidPath("path must contain at least two assets.")
    for index, asset in enumerate(path):
        require_address(asset, field_name=f"path[{index}]")


def require_deadline(deadline: int, *, now: int) -> None:
    if now > deadline:
        raise DeadlinePassed(f"deadline {deadline} is before current time {now}.")


def require_positive(amount: int, *, field_name: str) -> None:
    if amount is None or amount <= 0:
        raise InsufficientAmount(f"{field_name} must be greater than zero.")


def require_non_negative(amount: int, *, field_name: str) -> None:
    if amount is None or amount < 0:
        raise InsufficientAmount(f"{field_name} must not be negative.")


def validate_swap(
    *,
    path: Sequence[str] | None,
    amount: int,
    amount_limit: int,
    recipient: str | None,
    deadline: int,
    now: int,
) -> None:
    """Check a swap request before anything is moved into custody.

    ``amount`` is the exact side of the swap (input for exact-in, output for
    exact-out); ``amount_limit`` is the slippage bound on the other side.
    """
    require_path(path)
    require_deadline(deadline, now=now)
    require_positive(amount, field_name="amount")
    require_non_negative(amount_limit, field_name="amount_limit")
    require_address(recipient, field_name="recipient")


def validate_add_liquidity(
    *,
    token_a: str | None,
    token_b: str | None,
    amount_a_desired: int,
    amount_b_desired: int,
    amount_a_min: int,
    amount_b_min: int,
    recipient: str | None,
    deadline: int,
    now: int,
) -> None:
    require_address(token_a, field_name="token_a")
    require_address(token_b, field_name="token_b")
    if token_a.lower() == token_b.lower():
        raise InvalidParams("token_a and token_b must differ.")
    require_deadline(deadline, now=now)
    require_positive(amount_a_desired, field_name="amount_a_desired")
    require_positive(amount_b_desired, field_name="amount_b_desired")
    require_non_negative(amount_a_min, field_name="amount_a_min")
    require_non_negative(amount_b_min, field_name="amount_b_min")
    require_address(recipient, field_name="recipient")


def validate_remove_liquidity(
    *,
    token_a: str | None,
    token_b: str | None,
    liquidity: int,
    amount_a_min: int,
    amount_b_min: int,
    recipient: str | None,
    deadline: int,
    now: int,
) -> None:
    require_address(token_a, field_name="token_a")
    require_address(token_b, field_name="token_b")
    require_deadline(deadline, now=now)
    require_positive(liquidity, field_name="liquidity")
    require_non_negative(amount_a_min, field_name="amount_a_min")
    require_non_negative(amount_b_min, field_name="amount_b_min")
    require_address(recipient, field_name="recipient")

from __future__ import annotations

from amm_gateway.domain.exceptions import Unauthorized


def require_owner(caller: str | None, owner: str | None) -> None:
    if not caller or not owner or caller.lower() != owner.lower():
        raise Unauthorized("Caller is not the owner.")

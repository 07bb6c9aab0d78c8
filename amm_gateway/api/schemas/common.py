from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator


def _normalize_address(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


Address = Annotated[str, BeforeValidator(_normalize_address)]

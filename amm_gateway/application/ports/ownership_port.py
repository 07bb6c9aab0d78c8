from __future__ import annotations

from typing import Protocol


class OwnershipPort(Protocol):
    def get_owner(self) -> str | None:
        ...

    def set_owner(self, *, owner: str) -> None:
        ...

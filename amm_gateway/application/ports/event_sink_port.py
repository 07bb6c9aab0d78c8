from __future__ import annotations

from typing import Protocol

from amm_gateway.application.dto.events import RecordedEvent
from amm_gateway.domain.entities.events import LedgerEvent


class EventSinkPort(Protocol):
    def append(self, event: LedgerEvent) -> None:
        ...

    def list_recent(self, *, limit: int) -> list[RecordedEvent]:
        ...

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from amm_gateway.domain.entities.events import LedgerEvent


@dataclass(frozen=True)
class RecordedEvent:
    id: int
    name: str
    event: LedgerEvent
    created_at: datetime

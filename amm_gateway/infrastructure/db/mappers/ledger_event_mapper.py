from __future__ import annotations

from datetime import datetime
import json

from amm_gateway.application.dto.events import RecordedEvent
from amm_gateway.domain.entities.events import event_from_payload


def map_row_to_recorded_event(row) -> RecordedEvent:
    created_at = row["created_at"]
    if isinstance(created_at, str):
        created_at = datetime.fromisoformat(created_at)
    return RecordedEvent(
        id=int(row["id"]),
        name=row["name"],
        event=event_from_payload(row["name"], json.loads(row["payload"])),
        created_at=created_at,
    )

from __future__ import annotations

from datetime import datetime, timezone
import json

from sqlalchemy import text

from amm_gateway.application.dto.events import RecordedEvent
from amm_gateway.application.ports.event_sink_port import EventSinkPort
from amm_gateway.domain.entities.events import LedgerEvent, event_name, event_payload
from amm_gateway.infrastructure.db.engine import SqlConnectionScope
from amm_gateway.infrastructure.db.mappers.ledger_event_mapper import map_row_to_recorded_event


class SqlLedgerEventRepository(EventSinkPort):
    def __init__(self, scope: SqlConnectionScope):
        self._scope = scope

    def append(self, event: LedgerEvent) -> None:
        sql = """
            INSERT INTO ledger_events (name, payload, created_at)
            VALUES (:name, :payload, :created_at)
        """
        params = {
            "name": event_name(event),
            "payload": json.dumps(event_payload(event), sort_keys=True),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        with self._scope.connection() as conn:
            conn.execute(text(sql), params)

    def list_recent(self, *, limit: int) -> list[RecordedEvent]:
        sql = """
            SELECT id, name, payload, created_at
            FROM ledger_events
            ORDER BY id DESC
            LIMIT :limit
        """
        with self._scope.connection() as conn:
            rows = conn.execute(text(sql), {"limit": limit}).mappings().all()
        return [map_row_to_recorded_event(row) for row in rows]

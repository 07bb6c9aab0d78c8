from __future__ import annotations

from amm_gateway.application.dto.events import RecordedEvent
from amm_gateway.application.ports.event_sink_port import EventSinkPort


class ListEventsUseCase:
    def __init__(self, *, event_sink: EventSinkPort, max_limit: int = 500):
        self._event_sink = event_sink
        self._max_limit = max_limit

    def execute(self, *, limit: int) -> list[RecordedEvent]:
        if limit <= 0:
            raise ValueError("limit must be a positive integer.")
        return self._event_sink.list_recent(limit=min(limit, self._max_limit))

from __future__ import annotations

import logging

from amm_gateway.application.ports.event_sink_port import EventSinkPort
from amm_gateway.domain.entities.events import LedgerEvent, event_name, event_payload


logger = logging.getLogger(__name__)


class EventLedger:
    """Records audit events inside the open transaction; logs them once committed."""

    def __init__(self, *, sink: EventSinkPort):
        self._sink = sink
        self._pending: list[LedgerEvent] = []

    def emit(self, event: LedgerEvent) -> None:
        self._sink.append(event)
        self._pending.append(event)

    def publish_pending(self) -> list[LedgerEvent]:
        published, self._pending = self._pending, []
        for event in published:
            logger.info("event_ledger: %s %s", event_name(event), event_payload(event))
        return published

    def discard_pending(self) -> None:
        if self._pending:
            logger.warning("event_ledger: discarded events=%s", [event_name(e) for e in self._pending])
        self._pending = []

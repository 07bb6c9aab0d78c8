from __future__ import annotations

from contextlib import contextmanager
import logging
from threading import RLock
from typing import Iterator

from amm_gateway.application.ports.asset_ledger_port import AssetLedgerPort
from amm_gateway.application.services.event_ledger import EventLedger
from amm_gateway.domain.services.reentrancy import ReentrancyGuard


logger = logging.getLogger(__name__)


class OperationScope:
    """Runs one mutating operation: guard held, all ledger effects in one transaction.

    Calls from other threads queue on the lock; a nested call from the thread
    already inside an operation passes the lock and is rejected by the guard.
    The guard is taken before the transaction opens, so a rejected nested call
    never touches the ledger or the outer call's pending events.
    """

    def __init__(self, *, guard: ReentrancyGuard, ledger: AssetLedgerPort, events: EventLedger):
        self._guard = guard
        self._ledger = ledger
        self._events = events
        self._serializer = RLock()

    @contextmanager
    def run(self, operation: str) -> Iterator[None]:
        with self._serializer, self._guard.hold():
            try:
                with self._ledger.transaction():
                    yield
            except Exception as exc:
                self._events.discard_pending()
                logger.warning(
                    "operation_scope: rolled_back operation=%s error_type=%s",
                    operation,
                    type(exc).__name__,
                )
                raise
            self._events.publish_pending()

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from amm_gateway.domain.exceptions import Reentrant


class GuardState(str, Enum):
    UNLOCKED = "unlocked"
    LOCKED = "locked"


class ReentrancyGuard:
    """Call-scoped lock rejecting nested mutating operations on the same core.

    Calls from different callers are serialized by the runtime; this guard only
    has to catch a call that re-enters while an outer call is still in flight,
    e.g. from an asset transfer hook.
    """

    def __init__(self) -> None:
        self._state = GuardState.UNLOCKED

    @property
    def state(self) -> GuardState:
        return self._state

    @property
    def locked(self) -> bool:
        return self._state is GuardState.LOCKED

    def acquire(self) -> None:
        if self._state is GuardState.LOCKED:
            raise Reentrant("Operation already in progress.")
        self._state = GuardState.LOCKED

    def release(self) -> None:
        self._state = GuardState.UNLOCKED

    @contextmanager
    def hold(self) -> Iterator[None]:
        self.acquire()
        try:
            yield
        finally:
            self.release()

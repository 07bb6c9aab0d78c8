from __future__ import annotations

from amm_gateway.application.dto.admin import TransferOwnershipInput, TransferOwnershipOutput
from amm_gateway.application.ports.ownership_port import OwnershipPort
from amm_gateway.application.services.event_ledger import EventLedger
from amm_gateway.application.services.operation_scope import OperationScope
from amm_gateway.domain.entities.events import OwnershipTransferred
from amm_gateway.domain.services.ownership import require_owner
from amm_gateway.domain.services.request_validation import require_address


class TransferOwnershipUseCase:
    def __init__(self, *, scope: OperationScope, ownership_port: OwnershipPort, events: EventLedger):
        self._scope = scope
        self._ownership_port = ownership_port
        self._events = events

    def execute(self, command: TransferOwnershipInput) -> TransferOwnershipOutput:
        require_address(command.new_owner, field_name="new_owner")

        with self._scope.run("transfer_ownership"):
            previous = self._ownership_port.get_owner()
            require_owner(command.caller, previous)
            self._ownership_port.set_owner(owner=command.new_owner)
            self._events.emit(OwnershipTransferred(previous_owner=previous, new_owner=command.new_owner))

        return TransferOwnershipOutput(previous_owner=previous, new_owner=command.new_owner)


class GetOwnerUseCase:
    def __init__(self, *, ownership_port: OwnershipPort):
        self._ownership_port = ownership_port

    def execute(self) -> str | None:
        return self._ownership_port.get_owner()

from __future__ import annotations

import logging

from amm_gateway.application.dto.admin import RescueAssetInput, RescueNativeInput, RescueOutput
from amm_gateway.application.ports.ownership_port import OwnershipPort
from amm_gateway.application.services.asset_custodian import AssetCustodian
from amm_gateway.application.services.operation_scope import OperationScope
from amm_gateway.domain.services.ownership import require_owner
from amm_gateway.domain.services.request_validation import require_address, require_positive


logger = logging.getLogger(__name__)


class RescueAssetUseCase:
    def __init__(self, *, scope: OperationScope, custodian: AssetCustodian, ownership_port: OwnershipPort):
        self._scope = scope
        self._custodian = custodian
        self._ownership_port = ownership_port

    def execute(self, command: RescueAssetInput) -> RescueOutput:
        require_address(command.asset, field_name="asset")
        require_positive(command.amount, field_name="amount")

        # Read under the scope so the check and the payout see the same owner.
        with self._scope.run("rescue_asset"):
            owner = self._ownership_port.get_owner()
            require_owner(command.caller, owner)
            self._custodian.push_out(asset=command.asset, recipient=owner, amount=command.amount)

        logger.info("rescue: asset=%s amount=%s owner=%s", command.asset, command.amount, owner)
        return RescueOutput(asset=command.asset, amount=command.amount, owner=owner)


class RescueNativeUseCase:
    def __init__(self, *, scope: OperationScope, custodian: AssetCustodian, ownership_port: OwnershipPort):
        self._scope = scope
        self._custodian = custodian
        self._ownership_port = ownership_port

    def execute(self, command: RescueNativeInput) -> RescueOutput:
        require_positive(command.amount, field_name="amount")

        with self._scope.run("rescue_native"):
            owner = self._ownership_port.get_owner()
            require_owner(command.caller, owner)
            self._custodian.push_out_native(recipient=owner, amount=command.amount)

        logger.info("rescue: native amount=%s owner=%s", command.amount, owner)
        return RescueOutput(asset=None, amount=command.amount, owner=owner)

from __future__ import annotations

from amm_gateway.application.ports.asset_ledger_port import AssetLedgerPort
from amm_gateway.application.services.operation_scope import OperationScope
from amm_gateway.domain.entities.allowance import Allowance
from amm_gateway.domain.exceptions import InsufficientAmount, TransferFailed
from amm_gateway.domain.services.request_validation import require_address


class ApproveSpenderUseCase:
    """Caller-side approval, e.g. letting the core pull the caller's input asset.

    Runs under the operation scope, queued behind any in-flight operation.
    """

    def __init__(self, *, scope: OperationScope, ledger: AssetLedgerPort):
        self._scope = scope
        self._ledger = ledger

    def execute(self, *, caller: str, asset: str, spender: str, amount: int) -> Allowance:
        require_address(caller, field_name="caller")
        require_address(asset, field_name="asset")
        require_address(spender, field_name="spender")
        if amount is None or amount < 0:
            raise InsufficientAmount("amount must not be negative.")
        with self._scope.run("approve"):
            if not self._ledger.approve(asset=asset, owner=caller, spender=spender, amount=amount):
                raise TransferFailed("Approve rejected by the asset.")
        return Allowance(asset=asset, owner=caller, spender=spender, amount=amount)


class GetBalanceUseCase:
    def __init__(self, *, ledger: AssetLedgerPort):
        self._ledger = ledger

    def execute(self, *, holder: str, asset: str | None = None) -> int:
        require_address(holder, field_name="holder")
        if asset is None:
            return self._ledger.native_balance_of(holder=holder)
        require_address(asset, field_name="asset")
        return self._ledger.balance_of(asset=asset, holder=holder)

from __future__ import annotations

import logging

from amm_gateway.application.ports.asset_ledger_port import AssetLedgerPort
from amm_gateway.domain.exceptions import RefundFailed, TransferFailed


logger = logging.getLogger(__name__)


class AssetCustodian:
    """Moves assets in and out of the core's custody account. Never touches allowances."""

    def __init__(self, *, ledger: AssetLedgerPort, core_address: str):
        self._ledger = ledger
        self._core_address = core_address

    def pull_in(self, *, asset: str, source: str, amount: int) -> None:
        ok = self._ledger.transfer_from(
            asset=asset,
            spender=self._core_address,
            owner=source,
            recipient=self._core_address,
            amount=amount,
        )
        if not ok:
            raise TransferFailed(f"Could not pull {amount} of {asset} from {source}.")
        logger.debug("asset_custodian: pulled asset=%s source=%s amount=%s", asset, source, amount)

    def push_out(self, *, asset: str, recipient: str, amount: int) -> None:
        ok = self._ledger.transfer(
            asset=asset,
            sender=self._core_address,
            recipient=recipient,
            amount=amount,
        )
        if not ok:
            raise TransferFailed(f"Could not send {amount} of {asset} to {recipient}.")
        logger.debug("asset_custodian: pushed asset=%s recipient=%s amount=%s", asset, recipient, amount)

    def refund_unused(self, *, asset: str, recipient: str, supplied: int, used: int) -> int:
        remainder = supplied - used
        if remainder <= 0:
            return 0
        self.push_out(asset=asset, recipient=recipient, amount=remainder)
        return remainder

    def receive_native(self, *, source: str, amount: int) -> None:
        if amount <= 0:
            return
        ok = self._ledger.send_native(sender=source, recipient=self._core_address, amount=amount)
        if not ok:
            raise TransferFailed(f"Could not receive {amount} native from {source}.")

    def push_out_native(self, *, recipient: str, amount: int) -> None:
        ok = self._ledger.send_native(sender=self._core_address, recipient=recipient, amount=amount)
        if not ok:
            raise TransferFailed(f"Could not send {amount} native to {recipient}.")

    def native_balance(self) -> int:
        return self._ledger.native_balance_of(holder=self._core_address)

    def balance_of(self, *, asset: str, holder: str | None = None) -> int:
        return self._ledger.balance_of(asset=asset, holder=holder or self._core_address)

    def refund_excess_native(self, *, recipient: str, baseline: int) -> int:
        """Return native currency held above ``baseline`` (custody before the call)."""
        excess = self.native_balance() - baseline
        if excess <= 0:
            return 0
        ok = self._ledger.send_native(sender=self._core_address, recipient=recipient, amount=excess)
        if not ok:
            raise RefundFailed(f"Could not refund {excess} native to {recipient}.")
        logger.debug("asset_custodian: refunded_native recipient=%s amount=%s", recipient, excess)
        return excess

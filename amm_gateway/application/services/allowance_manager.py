from __future__ import annotations

from amm_gateway.application.ports.asset_ledger_port import AssetLedgerPort
from amm_gateway.domain.entities.allowance import Allowance
from amm_gateway.domain.exceptions import TransferFailed


class AllowanceManager:
    def __init__(self, *, ledger: AssetLedgerPort, owner: str):
        self._ledger = ledger
        self._owner = owner

    def grant(self, *, asset: str, spender: str, amount: int) -> Allowance:
        # Reset first: some assets reject a nonzero-to-nonzero change.
        self._approve(asset=asset, spender=spender, amount=0)
        if amount > 0:
            self._approve(asset=asset, spender=spender, amount=amount)
        return Allowance(asset=asset, owner=self._owner, spender=spender, amount=amount)

    def revoke(self, *, asset: str, spender: str) -> None:
        if self._ledger.allowance(asset=asset, owner=self._owner, spender=spender) == 0:
            return
        self._approve(asset=asset, spender=spender, amount=0)

    def current(self, *, asset: str, spender: str) -> Allowance:
        amount = self._ledger.allowance(asset=asset, owner=self._owner, spender=spender)
        return Allowance(asset=asset, owner=self._owner, spender=spender, amount=amount)

    def _approve(self, *, asset: str, spender: str, amount: int) -> None:
        ok = self._ledger.approve(asset=asset, owner=self._owner, spender=spender, amount=amount)
        if not ok:
            raise TransferFailed(f"Approve of {amount} {asset} for {spender} failed.")

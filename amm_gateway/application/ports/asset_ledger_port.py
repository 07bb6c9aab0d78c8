from __future__ import annotations

from typing import ContextManager, Protocol


class AssetLedgerPort(Protocol):
    """Balances, allowances and native currency held per account.

    ``transfer``, ``transfer_from``, ``approve`` and ``send_native`` report
    failure by returning ``False``; callers treat that as fatal. Everything done
    inside ``transaction()`` commits or rolls back as one unit.
    """

    def transaction(self) -> ContextManager[None]:
        ...

    def balance_of(self, *, asset: str, holder: str) -> int:
        ...

    def allowance(self, *, asset: str, owner: str, spender: str) -> int:
        ...

    def transfer(self, *, asset: str, sender: str, recipient: str, amount: int) -> bool:
        ...

    def transfer_from(
        self,
        *,
        asset: str,
        spender: str,
        owner: str,
        recipient: str,
        amount: int,
    ) -> bool:
        ...

    def approve(self, *, asset: str, owner: str, spender: str, amount: int) -> bool:
        ...

    def native_balance_of(self, *, holder: str) -> int:
        ...

    def send_native(self, *, sender: str, recipient: str, amount: int) -> bool:
        ...

    def mint(self, *, asset: str, recipient: str, amount: int) -> None:
        ...

    def burn(self, *, asset: str, holder: str, amount: int) -> bool:
        ...

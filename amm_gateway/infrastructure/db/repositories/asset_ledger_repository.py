from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import Iterator

from sqlalchemy import text

from amm_gateway.application.ports.asset_ledger_port import AssetLedgerPort
from amm_gateway.infrastructure.db.engine import SqlConnectionScope


logger = logging.getLogger(__name__)


class SqlAssetLedgerRepository(AssetLedgerPort):
    """Asset ledger on SQL tables; the database transaction is the commit unit.

    With ``strict_approvals`` an approval may only move to or from zero, the way
    some deployed assets behave.
    """

    def __init__(self, scope: SqlConnectionScope, *, strict_approvals: bool = False):
        self._scope = scope
        self._strict_approvals = strict_approvals

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._scope.transaction():
            yield

    def balance_of(self, *, asset: str, holder: str) -> int:
        with self._scope.connection() as conn:
            return self._balance(conn, asset=asset, holder=holder)

    def allowance(self, *, asset: str, owner: str, spender: str) -> int:
        with self._scope.connection() as conn:
            return self._allowance(conn, asset=asset, owner=owner, spender=spender)

    def transfer(self, *, asset: str, sender: str, recipient: str, amount: int) -> bool:
        if amount < 0:
            return False
        with self._scope.connection() as conn:
            return self._move(conn, asset=asset, sender=sender, recipient=recipient, amount=amount)

    def transfer_from(
        self,
        *,
        asset: str,
        spender: str,
        owner: str,
        recipient: str,
        amount: int,
    ) -> bool:
        if amount < 0:
            return False
        with self._scope.connection() as conn:
            allowed = self._lock_allowance(conn, asset=asset, owner=owner, spender=spender)
            if allowed < amount:
                logger.debug(
                    "asset_ledger: allowance_too_low asset=%s owner=%s spender=%s allowed=%s amount=%s",
                    asset,
                    owner,
                    spender,
                    allowed,
                    amount,
                )
                return False
            if not self._move(conn, asset=asset, sender=owner, recipient=recipient, amount=amount):
                return False
            self._set_allowance(conn, asset=asset, owner=owner, spender=spender, amount=allowed - amount)
        return True

    def approve(self, *, asset: str, owner: str, spender: str, amount: int) -> bool:
        if amount < 0:
            return False
        with self._scope.connection() as conn:
            current = self._lock_allowance(conn, asset=asset, owner=owner, spender=spender)
            if self._strict_approvals and amount != 0 and current != 0:
                return False
            self._set_allowance(conn, asset=asset, owner=owner, spender=spender, amount=amount)
        return True

    def native_balance_of(self, *, holder: str) -> int:
        with self._scope.connection() as conn:
            return self._native_balance(conn, holder=holder)

    def send_native(self, *, sender: str, recipient: str, amount: int) -> bool:
        if amount < 0:
            return False
        with self._scope.connection() as conn:
            locked = {holder: self._lock_native_balance(conn, holder=holder) for holder in sorted({sender, recipient})}
            available = locked[sender]
            if available < amount:
                return False
            if sender == recipient or amount == 0:
                return True
            self._set_native_balance(conn, holder=sender, amount=available - amount)
            self._set_native_balance(conn, holder=recipient, amount=locked[recipient] + amount)
        return True

    def mint(self, *, asset: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise ValueError("mint amount must not be negative.")
        with self._scope.connection() as conn:
            current = self._lock_balance(conn, asset=asset, holder=recipient)
            self._set_balance(conn, asset=asset, holder=recipient, amount=current + amount)

    def burn(self, *, asset: str, holder: str, amount: int) -> bool:
        if amount < 0:
            return False
        with self._scope.connection() as conn:
            current = self._lock_balance(conn, asset=asset, holder=holder)
            if current < amount:
                return False
            self._set_balance(conn, asset=asset, holder=holder, amount=current - amount)
        return True

    def credit_native(self, *, holder: str, amount: int) -> None:
        """Credit native currency from outside the ledger (deposits, bootstrap)."""
        if amount < 0:
            raise ValueError("credit amount must not be negative.")
        with self._scope.connection() as conn:
            current = self._lock_native_balance(conn, holder=holder)
            self._set_native_balance(conn, holder=holder, amount=current + amount)

    def _move(self, conn, *, asset: str, sender: str, recipient: str, amount: int) -> bool:
        # Rows are locked in a fixed order so two opposite transfers cannot deadlock.
        locked = {
            holder: self._lock_balance(conn, asset=asset, holder=holder) for holder in sorted({sender, recipient})
        }
        available = locked[sender]
        if available < amount:
            return False
        if sender == recipient or amount == 0:
            return True
        self._set_balance(conn, asset=asset, holder=sender, amount=available - amount)
        self._set_balance(conn, asset=asset, holder=recipient, amount=locked[recipient] + amount)
        return True

    @staticmethod
    def _for_update(conn) -> str:
        # SQLite has no row locks; the placeholder insert already takes its database write lock.
        return "" if conn.dialect.name == "sqlite" else "FOR UPDATE"

    @classmethod
    def _lock_balance(cls, conn, *, asset: str, holder: str) -> int:
        """Read a balance row for update, creating it at zero first so it can be locked."""
        insert_sql = """
            INSERT INTO asset_balances (asset, holder, amount)
            VALUES (:asset, :holder, '0')
            ON CONFLICT (asset, holder) DO NOTHING
        """
        conn.execute(text(insert_sql), {"asset": asset, "holder": holder})
        select_sql = f"""
            SELECT amount
            FROM asset_balances
            WHERE asset = :asset AND holder = :holder
            {cls._for_update(conn)}
        """
        value = conn.execute(text(select_sql), {"asset": asset, "holder": holder}).scalar()
        return int(value) if value is not None else 0

    @classmethod
    def _lock_allowance(cls, conn, *, asset: str, owner: str, spender: str) -> int:
        params = {"asset": asset, "owner": owner, "spender": spender}
        insert_sql = """
            INSERT INTO asset_allowances (asset, owner, spender, amount)
            VALUES (:asset, :owner, :spender, '0')
            ON CONFLICT (asset, owner, spender) DO NOTHING
        """
        conn.execute(text(insert_sql), params)
        select_sql = f"""
            SELECT amount
            FROM asset_allowances
            WHERE asset = :asset AND owner = :owner AND spender = :spender
            {cls._for_update(conn)}
        """
        value = conn.execute(text(select_sql), params).scalar()
        return int(value) if value is not None else 0

    @classmethod
    def _lock_native_balance(cls, conn, *, holder: str) -> int:
        insert_sql = """
            INSERT INTO native_balances (holder, amount)
            VALUES (:holder, '0')
            ON CONFLICT (holder) DO NOTHING
        """
        conn.execute(text(insert_sql), {"holder": holder})
        select_sql = f"""
            SELECT amount
            FROM native_balances
            WHERE holder = :holder
            {cls._for_update(conn)}
        """
        value = conn.execute(text(select_sql), {"holder": holder}).scalar()
        return int(value) if value is not None else 0

    @staticmethod
    def _balance(conn, *, asset: str, holder: str) -> int:
        sql = """
            SELECT amount
            FROM asset_balances
            WHERE asset = :asset AND holder = :holder
        """
        value = conn.execute(text(sql), {"asset": asset, "holder": holder}).scalar()
        return int(value) if value is not None else 0

    @staticmethod
    def _set_balance(conn, *, asset: str, holder: str, amount: int) -> None:
        sql = """
            INSERT INTO asset_balances (asset, holder, amount)
            VALUES (:asset, :holder, :amount)
            ON CONFLICT (asset, holder) DO UPDATE
            SET amount = excluded.amount
        """
        conn.execute(text(sql), {"asset": asset, "holder": holder, "amount": str(amount)})

    @staticmethod
    def _allowance(conn, *, asset: str, owner: str, spender: str) -> int:
        sql = """
            SELECT amount
            FROM asset_allowances
            WHERE asset = :asset AND owner = :owner AND spender = :spender
        """
        value = conn.execute(text(sql), {"asset": asset, "owner": owner, "spender": spender}).scalar()
        return int(value) if value is not None else 0

    @staticmethod
    def _set_allowance(conn, *, asset: str, owner: str, spender: str, amount: int) -> None:
        sql = """
            INSERT INTO asset_allowances (asset, owner, spender, amount)
            VALUES (:asset, :owner, :spender, :amount)
            ON CONFLICT (asset, owner, spender) DO UPDATE
            SET amount = excluded.amount
        """
        conn.execute(
            text(sql),
            {"asset": asset, "owner": owner, "spender": spender, "amount": str(amount)},
        )

    @staticmethod
    def _native_balance(conn, *, holder: str) -> int:
        sql = """
            SELECT amount
            FROM native_balances
            WHERE holder = :holder
        """
        value = conn.execute(text(sql), {"holder": holder}).scalar()
        return int(value) if value is not None else 0

    @staticmethod
    def _set_native_balance(conn, *, holder: str, amount: int) -> None:
        sql = """
            INSERT INTO native_balances (holder, amount)
            VALUES (:holder, :amount)
            ON CONFLICT (holder) DO UPDATE
            SET amount = excluded.amount
        """
        conn.execute(text(sql), {"holder": holder, "amount": str(amount)})

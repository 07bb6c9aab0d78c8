from __future__ import annotations

from sqlalchemy import text

from amm_gateway.application.ports.ownership_port import OwnershipPort
from amm_gateway.infrastructure.db.engine import SqlConnectionScope


_OWNER_ROW_ID = 1


class SqlOwnershipRepository(OwnershipPort):
    def __init__(self, scope: SqlConnectionScope):
        self._scope = scope

    def get_owner(self) -> str | None:
        sql = """
            SELECT address
            FROM core_owner
            WHERE id = :id
        """
        with self._scope.connection() as conn:
            return conn.execute(text(sql), {"id": _OWNER_ROW_ID}).scalar()

    def set_owner(self, *, owner: str) -> None:
        sql = """
            INSERT INTO core_owner (id, address)
            VALUES (:id, :address)
            ON CONFLICT (id) DO UPDATE
            SET address = excluded.address
        """
        with self._scope.connection() as conn:
            conn.execute(text(sql), {"id": _OWNER_ROW_ID, "address": owner})

    def ensure_owner(self, *, default_owner: str) -> str:
        """Seed the owner on first start; an existing owner is kept."""
        sql = """
            INSERT INTO core_owner (id, address)
            VALUES (:id, :address)
            ON CONFLICT (id) DO NOTHING
        """
        with self._scope.connection() as conn:
            conn.execute(text(sql), {"id": _OWNER_ROW_ID, "address": default_owner})
        return self.get_owner()

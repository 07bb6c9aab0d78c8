from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


@lru_cache(maxsize=4)
def get_engine(dsn: str) -> Engine:
    if dsn.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in dsn or dsn.split("://", 1)[-1] in ("", "/"):
            kwargs["poolclass"] = StaticPool
        return create_engine(dsn, future=True, **kwargs)
    return create_engine(dsn, future=True, pool_pre_ping=True)


def create_schema(engine: Engine) -> None:
    from amm_gateway.infrastructure.db.models import ledger  # noqa: F401

    Base.metadata.create_all(engine)


class SqlConnectionScope:
    """Shares one open transaction between the repositories bound to it.

    Inside ``transaction()`` every repository call runs on the same connection and
    commits or rolls back with it. Outside, each call gets its own short
    transaction. A nested ``transaction()`` joins the outer one.
    """

    def __init__(self, engine: Engine):
        self._engine = engine
        self._active: ContextVar[Connection | None] = ContextVar(f"sql_scope_{id(self)}", default=None)

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        conn = self._active.get()
        if conn is not None:
            yield conn
            return
        with self._engine.begin() as conn:
            token = self._active.set(conn)
            try:
                yield conn
            finally:
                self._active.reset(token)

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        conn = self._active.get()
        if conn is not None:
            yield conn
            return
        with self._engine.begin() as conn:
            yield conn

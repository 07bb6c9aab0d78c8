from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from amm_gateway.infrastructure.db.engine import Base


# Amounts are decimal strings: token base units routinely exceed 64 bits.


class AssetBalanceModel(Base):
    __tablename__ = "asset_balances"

    asset: Mapped[str] = mapped_column(Text, primary_key=True)
    holder: Mapped[str] = mapped_column(Text, primary_key=True)
    amount: Mapped[str] = mapped_column(Text, nullable=False, default="0")


class AssetAllowanceModel(Base):
    __tablename__ = "asset_allowances"

    asset: Mapped[str] = mapped_column(Text, primary_key=True)
    owner: Mapped[str] = mapped_column(Text, primary_key=True)
    spender: Mapped[str] = mapped_column(Text, primary_key=True)
    amount: Mapped[str] = mapped_column(Text, nullable=False, default="0")


class NativeBalanceModel(Base):
    __tablename__ = "native_balances"

    holder: Mapped[str] = mapped_column(Text, primary_key=True)
    amount: Mapped[str] = mapped_column(Text, nullable=False, default="0")


class CoreOwnerModel(Base):
    __tablename__ = "core_owner"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)


class LedgerEventModel(Base):
    __tablename__ = "ledger_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

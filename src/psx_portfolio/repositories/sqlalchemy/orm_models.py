"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    Index,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from psx_portfolio.repositories.sqlalchemy.database import Base
from psx_portfolio.domain.models.enums import TransactionType


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "transactions"

    txn_id = Column(Integer, primary_key=True, autoincrement=True)
    trade_date = Column(Date, nullable=False)
    symbol = Column(String(10), nullable=False)
    txn_type = Column(SqlEnum(TransactionType), nullable=False)
    quantity = Column(Integer, nullable=False)
    rate = Column(Numeric(precision=18, scale=4), nullable=False)
    amount = Column(Numeric(precision=20, scale=4), nullable=False)
    commission = Column(Numeric(precision=18, scale=2), nullable=False)
    tax = Column(Numeric(precision=18, scale=2), nullable=False)
    depository_fee = Column(Numeric(precision=18, scale=2), nullable=False)
    total_charges = Column(Numeric(precision=18, scale=2), nullable=False)
    net_amount = Column(Numeric(precision=20, scale=4), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=datetime.utcnow)

    realized_pnl = relationship(
        "RealizedPnLORM",
        back_populates="transaction",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_transactions_symbol_date", "symbol", "trade_date", "txn_id"),
    )


class HoldingORM(Base):
    """SQLAlchemy model for Holding (derived per-symbol state)."""

    __tablename__ = "holdings"

    symbol = Column(String(10), primary_key=True)
    available_quantity = Column(Integer, nullable=False, default=0)
    avg_cost_per_share = Column(Numeric(precision=18, scale=4), nullable=False, default=Decimal("0"))
    total_invested_amount = Column(Numeric(precision=20, scale=4), nullable=False, default=Decimal("0"))
    remaining_cost = Column(Numeric(precision=20, scale=4), nullable=False, default=Decimal("0"))
    total_shares_bought = Column(Integer, nullable=False, default=0)
    total_shares_sold = Column(Integer, nullable=False, default=0)
    total_realized_pnl = Column(Numeric(precision=20, scale=4), nullable=False, default=Decimal("0"))
    updated_at = Column(DateTime, nullable=True)


class RealizedPnLORM(Base):
    """SQLAlchemy model for RealizedPnLRecord (one per SELL)."""

    __tablename__ = "realized_pnl"

    record_id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_id = Column(
        Integer,
        ForeignKey("transactions.txn_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    symbol = Column(String(10), nullable=False, index=True)
    sell_date = Column(Date, nullable=False)
    quantity_sold = Column(Integer, nullable=False)
    sell_rate = Column(Numeric(precision=18, scale=4), nullable=False)
    avg_cost_basis = Column(Numeric(precision=18, scale=4), nullable=False)
    gross_proceeds = Column(Numeric(precision=20, scale=4), nullable=False)
    net_proceeds = Column(Numeric(precision=20, scale=4), nullable=False)
    cost_basis = Column(Numeric(precision=20, scale=4), nullable=False)
    realized_pnl = Column(Numeric(precision=20, scale=4), nullable=False)
    pnl_percentage = Column(Numeric(precision=12, scale=4), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    transaction = relationship("TransactionORM", back_populates="realized_pnl")

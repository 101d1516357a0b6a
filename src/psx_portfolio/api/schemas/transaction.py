"""Pydantic schemas for transaction endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from psx_portfolio.api.schemas.reports import RealizedPnLResponse
from psx_portfolio.domain.models import Transaction, TransactionType


class TransactionCreateRequest(BaseModel):
    """Request schema for recording a trade."""

    trade_date: date = Field(..., description="Trade date (exchange local)")
    symbol: str = Field(..., min_length=1, max_length=10, description="PSX symbol, e.g. TRG")
    txn_type: TransactionType = Field(..., description="BUY or SELL")
    quantity: int = Field(..., gt=0, description="Whole number of shares")
    rate: Decimal = Field(..., gt=0, description="Price per share, up to 4 decimal places")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    txn_id: int
    trade_date: date
    symbol: str
    txn_type: TransactionType
    quantity: int
    rate: Decimal
    amount: Decimal
    commission: Decimal
    tax: Decimal
    depository_fee: Decimal
    total_charges: Decimal
    net_amount: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionResponse":
        return cls(
            txn_id=txn.txn_id,
            trade_date=txn.trade_date,
            symbol=txn.symbol,
            txn_type=txn.txn_type,
            quantity=txn.quantity,
            rate=txn.rate,
            amount=txn.amount,
            commission=txn.charges.commission,
            tax=txn.charges.tax,
            depository_fee=txn.charges.depository_fee,
            total_charges=txn.charges.total,
            net_amount=txn.net_amount,
            created_at=txn.created_at,
            updated_at=txn.updated_at,
        )


class TransactionDetailResponse(TransactionResponse):
    """A transaction with the realized P/L it booked (SELL only)."""

    realized_pnl: Optional[RealizedPnLResponse] = None


class TransactionListResponse(BaseModel):
    """Response schema for one page of transactions."""

    transactions: list[TransactionResponse]
    total: int
    page: int
    limit: int
    pages: int

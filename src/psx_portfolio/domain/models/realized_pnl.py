"""Realized profit/loss domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class RealizedPnLRecord:
    """
    Gain or loss booked by one completed SELL.

    Append-only: records are only ever discarded wholesale when a symbol is
    rebuilt, never edited.
    """

    record_id: Optional[int]
    transaction_id: int
    symbol: str
    sell_date: date
    quantity_sold: int
    sell_rate: Decimal
    avg_cost_basis: Decimal
    gross_proceeds: Decimal
    net_proceeds: Decimal
    cost_basis: Decimal
    realized_pnl: Decimal
    pnl_percentage: Decimal
    created_at: Optional[datetime] = field(default=None)

    @property
    def is_profit(self) -> bool:
        return self.realized_pnl > 0

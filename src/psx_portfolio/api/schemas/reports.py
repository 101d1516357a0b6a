"""Pydantic schemas for realized P/L report endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class RealizedPnLResponse(BaseModel):
    """Response schema for one realized P/L record."""

    model_config = {"from_attributes": True}

    record_id: int
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
    created_at: Optional[datetime] = None


class RealizedPnLListResponse(BaseModel):
    """Response schema for realized P/L history."""

    records: list[RealizedPnLResponse]
    total_realized_pnl: Decimal


class MonthlyPnLResponse(BaseModel):
    """Response schema for one month of realized P/L."""

    model_config = {"from_attributes": True}

    year: int
    month: int
    net_pnl: Decimal
    total_profit: Decimal
    total_loss: Decimal
    sell_count: int


class YearlyPnLResponse(BaseModel):
    """Response schema for one year of realized P/L."""

    model_config = {"from_attributes": True}

    year: int
    total_pnl: Decimal
    total_transactions: int
    total_charges: Decimal
    monthly_breakdown: list[MonthlyPnLResponse]


class ScriptPnLResponse(BaseModel):
    """Response schema for lifetime figures of one symbol."""

    model_config = {"from_attributes": True}

    symbol: str
    total_pnl: Decimal
    total_quantity_traded: int
    total_invested: Decimal
    total_recovered: Decimal
    avg_buy_rate: Decimal
    avg_sell_rate: Decimal
    available_quantity: int
    current_avg_cost: Decimal

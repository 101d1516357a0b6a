"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from psx_portfolio.api.schemas.reports import RealizedPnLResponse
from psx_portfolio.api.schemas.transaction import TransactionResponse


class HoldingResponse(BaseModel):
    """Response schema for a single holding."""

    model_config = {"from_attributes": True}

    symbol: str
    available_quantity: int
    avg_cost_per_share: Decimal
    total_invested_amount: Decimal
    remaining_cost: Decimal
    total_shares_bought: int
    total_shares_sold: int
    total_realized_pnl: Decimal
    updated_at: Optional[datetime] = None


class PortfolioSummaryResponse(BaseModel):
    """Response schema for the portfolio overview."""

    model_config = {"from_attributes": True}

    holdings: list[HoldingResponse]
    total_invested: Decimal
    total_recovered: Decimal
    total_realized_pnl: Decimal
    total_shares_held: int
    active_symbol_count: int


class ScriptDetailsResponse(BaseModel):
    """Response schema for everything known about one symbol."""

    holding: HoldingResponse
    transactions: list[TransactionResponse]
    realized_pnl: list[RealizedPnLResponse]


class RebuildResponse(BaseModel):
    """Response schema for a rebuild run."""

    rebuilt_symbols: list[str]

"""Pydantic schemas for API request/response."""

from psx_portfolio.api.schemas.reports import (
    RealizedPnLResponse,
    RealizedPnLListResponse,
    MonthlyPnLResponse,
    YearlyPnLResponse,
    ScriptPnLResponse,
)
from psx_portfolio.api.schemas.transaction import (
    TransactionCreateRequest,
    TransactionResponse,
    TransactionDetailResponse,
    TransactionListResponse,
)
from psx_portfolio.api.schemas.portfolio import (
    HoldingResponse,
    PortfolioSummaryResponse,
    ScriptDetailsResponse,
    RebuildResponse,
)

__all__ = [
    "RealizedPnLResponse",
    "RealizedPnLListResponse",
    "MonthlyPnLResponse",
    "YearlyPnLResponse",
    "ScriptPnLResponse",
    "TransactionCreateRequest",
    "TransactionResponse",
    "TransactionDetailResponse",
    "TransactionListResponse",
    "HoldingResponse",
    "PortfolioSummaryResponse",
    "ScriptDetailsResponse",
    "RebuildResponse",
]

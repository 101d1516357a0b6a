"""View models for service outputs."""

from psx_portfolio.domain.views.portfolio import (
    Page,
    TransactionDetail,
    PortfolioSummary,
    ScriptDetails,
)
from psx_portfolio.domain.views.reports import MonthlyPnL, YearlyPnL, ScriptPnL

__all__ = [
    "Page",
    "TransactionDetail",
    "PortfolioSummary",
    "ScriptDetails",
    "MonthlyPnL",
    "YearlyPnL",
    "ScriptPnL",
]

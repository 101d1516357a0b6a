"""API routers package."""

from psx_portfolio.api.routers.transactions import router as transactions_router
from psx_portfolio.api.routers.portfolio import router as portfolio_router
from psx_portfolio.api.routers.reports import router as reports_router

__all__ = [
    "transactions_router",
    "portfolio_router",
    "reports_router",
]

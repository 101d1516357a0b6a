"""Service layer - business logic orchestration."""

from psx_portfolio.services.charges import (
    ChargeSchedule,
    DEFAULT_SCHEDULE,
    compute_charges,
    compute_net_amount,
)
from psx_portfolio.services.ledger_service import LedgerService, TransactionCreate
from psx_portfolio.services.pnl_recorder import RealizedPnLRecorder, compute_realized_pnl
from psx_portfolio.services.portfolio_engine import PortfolioEngine, ReplayState, replay
from psx_portfolio.services.report_service import ReportService

__all__ = [
    "ChargeSchedule",
    "DEFAULT_SCHEDULE",
    "compute_charges",
    "compute_net_amount",
    "LedgerService",
    "TransactionCreate",
    "RealizedPnLRecorder",
    "compute_realized_pnl",
    "PortfolioEngine",
    "ReplayState",
    "replay",
    "ReportService",
]

"""Repository protocol definitions (interfaces)."""

from psx_portfolio.repositories.protocols.transaction_repo import TransactionRepository
from psx_portfolio.repositories.protocols.holding_repo import HoldingRepository
from psx_portfolio.repositories.protocols.realized_pnl_repo import RealizedPnLRepository
from psx_portfolio.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "TransactionRepository",
    "HoldingRepository",
    "RealizedPnLRepository",
    "UnitOfWork",
]

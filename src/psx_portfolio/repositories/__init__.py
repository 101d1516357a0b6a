"""Repository layer - data access abstractions and implementations."""

from psx_portfolio.repositories.protocols import (
    TransactionRepository,
    HoldingRepository,
    RealizedPnLRepository,
    UnitOfWork,
)

__all__ = [
    "TransactionRepository",
    "HoldingRepository",
    "RealizedPnLRepository",
    "UnitOfWork",
]

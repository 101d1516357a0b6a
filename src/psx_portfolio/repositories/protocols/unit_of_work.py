"""Unit of work protocol: one commit boundary per write operation."""

from typing import Protocol

from psx_portfolio.repositories.protocols.transaction_repo import TransactionRepository
from psx_portfolio.repositories.protocols.holding_repo import HoldingRepository
from psx_portfolio.repositories.protocols.realized_pnl_repo import RealizedPnLRepository


class UnitOfWork(Protocol):
    """
    Groups the repositories that share one storage transaction.

    Repositories only flush; nothing is durable until ``commit``. Leaving the
    context manager on an exception rolls back.
    """

    transactions: TransactionRepository
    holdings: HoldingRepository
    realized_pnl: RealizedPnLRepository

    def __enter__(self) -> "UnitOfWork":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...

    def close(self) -> None:
        ...

"""SQLAlchemy implementation of UnitOfWork."""

from sqlalchemy.orm import Session

from psx_portfolio.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from psx_portfolio.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from psx_portfolio.repositories.sqlalchemy.realized_pnl_repo import SqlAlchemyRealizedPnLRepository


class SqlAlchemyUnitOfWork:
    """
    Repositories bound to one session; the session transaction is the commit boundary.

    Usage:
        with uow:
            uow.transactions.create(...)
            uow.commit()
    """

    def __init__(self, db: Session):
        self._db = db
        self.transactions = SqlAlchemyTransactionRepository(db)
        self.holdings = SqlAlchemyHoldingRepository(db)
        self.realized_pnl = SqlAlchemyRealizedPnLRepository(db)

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()

    def commit(self) -> None:
        self._db.commit()

    def rollback(self) -> None:
        self._db.rollback()

    def close(self) -> None:
        self._db.close()

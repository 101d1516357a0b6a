"""SQLAlchemy repository implementations."""

from psx_portfolio.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from psx_portfolio.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from psx_portfolio.repositories.sqlalchemy.holding_repo import SqlAlchemyHoldingRepository
from psx_portfolio.repositories.sqlalchemy.realized_pnl_repo import SqlAlchemyRealizedPnLRepository
from psx_portfolio.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyHoldingRepository",
    "SqlAlchemyRealizedPnLRepository",
    "SqlAlchemyUnitOfWork",
]

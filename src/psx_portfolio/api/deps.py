"""Dependency injection for FastAPI."""

from fastapi import Depends
from sqlalchemy.orm import Session

from psx_portfolio.config.settings import get_settings
from psx_portfolio.core.clock import today_pkt
from psx_portfolio.repositories.sqlalchemy import SqlAlchemyUnitOfWork
from psx_portfolio.repositories.sqlalchemy.database import get_db
from psx_portfolio.services import (
    ChargeSchedule,
    LedgerService,
    PortfolioEngine,
    ReportService,
)


def get_uow(db: Session = Depends(get_db)) -> SqlAlchemyUnitOfWork:
    """Provide a UnitOfWork bound to the request session."""
    return SqlAlchemyUnitOfWork(db)


def get_clock():
    """Provide the "today" callable used for future-date checks."""
    return today_pkt


def get_portfolio_engine(
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
) -> PortfolioEngine:
    """Provide PortfolioEngine instance."""
    return PortfolioEngine(
        uow=uow,
        invested_amount_policy=get_settings().invested_amount_policy,
    )


def get_ledger_service(
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
    portfolio_engine: PortfolioEngine = Depends(get_portfolio_engine),
    clock=Depends(get_clock),
) -> LedgerService:
    """Provide LedgerService instance."""
    settings = get_settings()
    return LedgerService(
        uow=uow,
        portfolio_engine=portfolio_engine,
        charge_schedule=ChargeSchedule.from_settings(settings),
        clock=clock,
        max_page_size=settings.max_page_size,
    )


def get_report_service(
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
    portfolio_engine: PortfolioEngine = Depends(get_portfolio_engine),
) -> ReportService:
    """Provide ReportService instance."""
    return ReportService(uow=uow, portfolio_engine=portfolio_engine)

"""In-process access to the ledger without going through HTTP.

Used by maintenance scripts and embedding callers::

    with AppContext(data_dir=Path("~/psx")) as ctx:
        ctx.ledger.create_transaction(...)
        print(ctx.portfolio.get_portfolio_summary())
"""

from pathlib import Path
from typing import Optional

from psx_portfolio.config.settings import Settings, set_settings, get_settings
from psx_portfolio.core.clock import Clock, today_pkt
from psx_portfolio.core.locks import get_symbol_locks
from psx_portfolio.repositories.sqlalchemy import SqlAlchemyUnitOfWork
from psx_portfolio.repositories.sqlalchemy.database import init_db_with_path, get_session
from psx_portfolio.services import (
    ChargeSchedule,
    LedgerService,
    PortfolioEngine,
    ReportService,
)

DATABASE_FILENAME = "portfolio.db"


class AppContext:
    """
    Service container bound to one SQLite file.

    Services are built on first use and share a single unit of work, so a
    report sees trades recorded through ``ledger`` immediately.
    """

    def __init__(self, data_dir: Optional[Path] = None, clock: Clock = today_pkt):
        self._data_dir = data_dir
        self._clock = clock
        self._uow: Optional[SqlAlchemyUnitOfWork] = None
        self._initialized = False

        self._ledger: Optional[LedgerService] = None
        self._portfolio: Optional[PortfolioEngine] = None
        self._reports: Optional[ReportService] = None

    def __enter__(self) -> "AppContext":
        if not self._initialized:
            self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """Point settings and the database at ``data_dir`` and create tables."""
        if data_dir:
            self._data_dir = data_dir

        settings = Settings(data_dir=self._data_dir)
        set_settings(settings)
        init_db_with_path(settings.get_data_dir() / DATABASE_FILENAME)

        self.close()
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def data_dir(self) -> Path:
        """Directory holding the ledger database."""
        return get_settings().get_data_dir()

    @property
    def uow(self) -> SqlAlchemyUnitOfWork:
        if self._uow is None:
            self._uow = SqlAlchemyUnitOfWork(get_session())
        return self._uow

    @property
    def portfolio(self) -> PortfolioEngine:
        if self._portfolio is None:
            self._portfolio = PortfolioEngine(
                uow=self.uow,
                invested_amount_policy=get_settings().invested_amount_policy,
                locks=get_symbol_locks(),
            )
        return self._portfolio

    @property
    def ledger(self) -> LedgerService:
        if self._ledger is None:
            settings = get_settings()
            self._ledger = LedgerService(
                uow=self.uow,
                portfolio_engine=self.portfolio,
                charge_schedule=ChargeSchedule.from_settings(settings),
                clock=self._clock,
                locks=get_symbol_locks(),
                max_page_size=settings.max_page_size,
            )
        return self._ledger

    @property
    def reports(self) -> ReportService:
        if self._reports is None:
            self._reports = ReportService(uow=self.uow, portfolio_engine=self.portfolio)
        return self._reports

    def rebuild(self) -> list[str]:
        """Rebuild every holding and P/L record from the ledger."""
        return self.portfolio.rebuild_all()

    def close(self) -> None:
        """Close the shared session and drop built services."""
        if self._uow is not None:
            self._uow.close()
            self._uow = None
        self._ledger = None
        self._portfolio = None
        self._reports = None

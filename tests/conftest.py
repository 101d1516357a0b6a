"""
Pytest configuration and fixtures for PSX portfolio ledger tests.

This module provides:
- In-memory SQLite database fixtures
- Unit of work and repository fixtures
- Services wired with a fixed "today" clock
- Factory helpers for BUY/SELL input
- FastAPI test client bound to the test database
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable, Union

import pytest
from sqlalchemy import create_engine, event, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from psx_portfolio.api.deps import get_clock
from psx_portfolio.config.settings import Settings, set_settings, reset_settings
from psx_portfolio.core.locks import SymbolLocks
from psx_portfolio.domain.models import (
    Holding,
    InvestedAmountPolicy,
    RealizedPnLRecord,
    Transaction,
    TransactionType,
)
from psx_portfolio.main import app
from psx_portfolio.repositories.sqlalchemy.database import (
    Base,
    enable_sqlite_foreign_keys,
    get_db,
    reset_database,
)
# Import ORM models to register them with Base before creating tables
from psx_portfolio.repositories.sqlalchemy import orm_models  # noqa: F401
from psx_portfolio.repositories.sqlalchemy import SqlAlchemyUnitOfWork
from psx_portfolio.services import (
    LedgerService,
    PortfolioEngine,
    ReportService,
    TransactionCreate,
)

# The last trading day the test clock reports as "today"
TODAY = date(2024, 6, 28)


def fixed_clock() -> date:
    return TODAY


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


def build_test_engine():
    """Shared in-memory SQLite engine with the ledger tables created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    Base.metadata.create_all(bind=engine)
    return engine


def build_session_factory(engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = build_test_engine()
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine) -> sessionmaker:
    """Session factory configured like the application's."""
    return build_session_factory(test_engine)


@pytest.fixture(scope="function")
def test_session(session_factory) -> Session:
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def uow(test_session) -> SqlAlchemyUnitOfWork:
    """Provide a unit of work over the test session."""
    return SqlAlchemyUnitOfWork(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def symbol_locks() -> SymbolLocks:
    """Fresh lock registry per test."""
    return SymbolLocks()


@pytest.fixture
def invested_amount_policy() -> InvestedAmountPolicy:
    """Policy used by the engine; override in a module to test REDUCE."""
    return InvestedAmountPolicy.RETAIN


@pytest.fixture
def portfolio_engine(uow, invested_amount_policy, symbol_locks) -> PortfolioEngine:
    """Provide test PortfolioEngine."""
    return PortfolioEngine(
        uow=uow,
        invested_amount_policy=invested_amount_policy,
        locks=symbol_locks,
    )


@pytest.fixture
def ledger_service(uow, portfolio_engine, symbol_locks) -> LedgerService:
    """Provide test LedgerService with a fixed clock."""
    return LedgerService(
        uow=uow,
        portfolio_engine=portfolio_engine,
        clock=fixed_clock,
        locks=symbol_locks,
    )


@pytest.fixture
def report_service(uow, portfolio_engine) -> ReportService:
    """Provide test ReportService."""
    return ReportService(uow=uow, portfolio_engine=portfolio_engine)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def buy(ledger_service) -> Callable[..., Transaction]:
    """Factory recording a BUY through the ledger service."""

    def _buy(symbol: str, quantity: int, rate: Union[str, Decimal], trade_date: date = date(2024, 1, 15)):
        return ledger_service.create_transaction(
            create_buy_data(symbol, quantity, rate, trade_date)
        )

    return _buy


@pytest.fixture
def sell(ledger_service) -> Callable[..., Transaction]:
    """Factory recording a SELL through the ledger service."""

    def _sell(symbol: str, quantity: int, rate: Union[str, Decimal], trade_date: date = date(2024, 2, 15)):
        return ledger_service.create_transaction(
            create_sell_data(symbol, quantity, rate, trade_date)
        )

    return _sell


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(session_factory) -> TestClient:
    """Provide FastAPI test client with test database."""
    set_settings(Settings(database_url="sqlite:///:memory:"))
    reset_database()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0"),
) -> None:
    """Assert two Decimals are equal (exactly, unless a tolerance is given)."""
    diff = abs(Decimal(actual) - Decimal(expected))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def create_buy_data(
    symbol: str,
    quantity: int,
    rate: Union[str, Decimal],
    trade_date: date = date(2024, 1, 15),
) -> TransactionCreate:
    """Helper to create BUY transaction data."""
    return TransactionCreate(
        trade_date=trade_date,
        symbol=symbol,
        txn_type=TransactionType.BUY,
        quantity=quantity,
        rate=Decimal(str(rate)),
    )


def create_sell_data(
    symbol: str,
    quantity: int,
    rate: Union[str, Decimal],
    trade_date: date = date(2024, 2, 15),
) -> TransactionCreate:
    """Helper to create SELL transaction data."""
    return TransactionCreate(
        trade_date=trade_date,
        symbol=symbol,
        txn_type=TransactionType.SELL,
        quantity=quantity,
        rate=Decimal(str(rate)),
    )


def holding_state(holding: Holding) -> Holding:
    """Holding without its timestamp, for comparing derived state."""
    return replace(holding, updated_at=None)


def record_state(record: RealizedPnLRecord) -> RealizedPnLRecord:
    """P/L record without row id and timestamp, for comparing derived state."""
    return replace(record, record_id=None, created_at=None)

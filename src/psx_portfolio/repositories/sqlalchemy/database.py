"""Engine, session factory and schema creation for the ledger database."""

from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from psx_portfolio.config.settings import get_settings

Base = declarative_base()

# Module-level database state (can be reconfigured at runtime)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Connect-event hook turning on foreign key enforcement for SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections enforce foreign keys."""
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=False)

    engine = create_engine(
        database_url,
        connect_args={"check_same_thread": False},
        echo=False,
    )
    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    return engine


def _configure(database_url: str) -> None:
    global _engine, _SessionLocal

    _engine = build_engine(database_url)
    _SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=_engine,
    )


def get_engine() -> Engine:
    """Get or create the engine for the configured database URL."""
    if _engine is None:
        _configure(get_settings().get_database_url())
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the session factory."""
    if _SessionLocal is None:
        _configure(get_settings().get_database_url())
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def get_session() -> Session:
    """Open a session outside a request (in-process use)."""
    return get_session_factory()()


def create_tables(engine: Engine) -> None:
    """Create the transactions, holdings and realized_pnl tables."""
    from psx_portfolio.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def init_db() -> None:
    """Create tables in the configured database."""
    create_tables(get_engine())


def init_db_with_path(db_path: Path) -> None:
    """Point the module at a SQLite file and create its tables."""
    reset_database()
    _configure(f"sqlite:///{db_path}")
    create_tables(_engine)


def reset_database() -> None:
    """Dispose the engine so the next access reconfigures from settings."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()

    _engine = None
    _SessionLocal = None

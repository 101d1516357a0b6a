"""Core utilities and shared functionality."""

from psx_portfolio.core.clock import (
    Clock,
    PSX_TZ,
    now_pkt,
    today_pkt,
    to_pkt,
    parse_trade_date,
)
from psx_portfolio.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    InsufficientQuantityError,
    ConsistencyError,
)
from psx_portfolio.core.locks import SymbolLocks, get_symbol_locks

__all__ = [
    "Clock",
    "PSX_TZ",
    "now_pkt",
    "today_pkt",
    "to_pkt",
    "parse_trade_date",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "InsufficientQuantityError",
    "ConsistencyError",
    "SymbolLocks",
    "get_symbol_locks",
]

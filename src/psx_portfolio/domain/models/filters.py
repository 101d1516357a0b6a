"""Explicit query filters for the transaction store and P/L history."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from psx_portfolio.domain.models.enums import TransactionType

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50


@dataclass
class TransactionFilter:
    """
    Transaction query.

    All fields are optional; dates are inclusive. ``page`` is 1-based.
    """

    symbol: Optional[str] = None
    side: Optional[TransactionType] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.symbol:
            self.symbol = self.symbol.strip().upper()
        if isinstance(self.side, str):
            self.side = TransactionType(self.side)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class RealizedPnLFilter:
    """Realized P/L history query (by symbol and/or inclusive sell-date range)."""

    symbol: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    def __post_init__(self) -> None:
        if self.symbol:
            self.symbol = self.symbol.strip().upper()

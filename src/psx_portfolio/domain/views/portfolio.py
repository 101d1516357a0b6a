"""View models for ledger and portfolio outputs."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Generic, Optional, TypeVar

from psx_portfolio.domain.models import Holding, RealizedPnLRecord, Transaction

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a paginated query."""

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        """Total number of pages (at least 1)."""
        if self.total == 0:
            return 1
        return -(-self.total // self.limit)


@dataclass
class TransactionDetail:
    """A transaction together with the P/L record it produced, if any."""

    transaction: Transaction
    realized_pnl: Optional[RealizedPnLRecord] = None


@dataclass
class PortfolioSummary:
    """Portfolio-wide totals derived from the stored holdings."""

    holdings: list[Holding] = field(default_factory=list)
    total_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    total_recovered: Decimal = field(default_factory=lambda: Decimal("0"))
    total_realized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    total_shares_held: int = 0
    active_symbol_count: int = 0


@dataclass
class ScriptDetails:
    """Everything known about one symbol ("script" in PSX parlance)."""

    holding: Holding
    transactions: list[Transaction] = field(default_factory=list)
    realized_pnl: list[RealizedPnLRecord] = field(default_factory=list)

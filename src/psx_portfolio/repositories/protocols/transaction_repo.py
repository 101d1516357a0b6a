"""Transaction repository protocol."""

from datetime import date
from decimal import Decimal
from typing import Protocol, Optional

from psx_portfolio.domain.models import Transaction, TransactionFilter, TransactionType
from psx_portfolio.domain.views import Page


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction and return it with its id assigned."""
        ...

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def delete(self, txn_id: int) -> None:
        """Delete a transaction; the database cascades to its realized P/L record."""
        ...

    def list_by_symbol(self, symbol: str) -> list[Transaction]:
        """List a symbol's transactions in replay order (trade date, then id)."""
        ...

    def list_symbols(self) -> list[str]:
        """List distinct symbols that have transactions."""
        ...

    def latest_trade_date(self, symbol: str) -> Optional[date]:
        """Most recent trade date recorded for a symbol."""
        ...

    def query(self, filters: TransactionFilter) -> Page[Transaction]:
        """Query transactions with filters, newest first."""
        ...

    def total_net_amount(self, txn_type: TransactionType) -> Decimal:
        """Sum of net amounts over all transactions of one side."""
        ...

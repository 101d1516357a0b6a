"""Realized P/L repository protocol."""

from typing import Protocol, Optional

from psx_portfolio.domain.models import RealizedPnLRecord, RealizedPnLFilter


class RealizedPnLRepository(Protocol):
    """Interface for realized P/L record data access."""

    def add(self, record: RealizedPnLRecord) -> RealizedPnLRecord:
        """Append a record and return it with its id assigned."""
        ...

    def get_by_transaction(self, txn_id: int) -> Optional[RealizedPnLRecord]:
        """Get the record produced by a SELL transaction."""
        ...

    def delete_by_transaction(self, txn_id: int) -> None:
        """Delete the record(s) produced by a transaction."""
        ...

    def delete_by_symbol(self, symbol: str) -> None:
        """Delete all records for a symbol (for rebuild)."""
        ...

    def query(self, filters: RealizedPnLFilter) -> list[RealizedPnLRecord]:
        """Query records, newest sell date first."""
        ...

"""Holding repository protocol for derived data."""

from typing import Protocol, Optional

from psx_portfolio.domain.models import Holding


class HoldingRepository(Protocol):
    """Interface for holding data access."""

    def get(self, symbol: str) -> Optional[Holding]:
        """Get the holding for a symbol."""
        ...

    def get_for_update(self, symbol: str) -> Optional[Holding]:
        """Get the holding for a symbol, locking the row where supported."""
        ...

    def list_all(self) -> list[Holding]:
        """List all holdings ordered by symbol."""
        ...

    def save(self, holding: Holding) -> Holding:
        """Insert or update a holding."""
        ...

    def delete(self, symbol: str) -> None:
        """Delete the holding for a symbol (for rebuild)."""
        ...

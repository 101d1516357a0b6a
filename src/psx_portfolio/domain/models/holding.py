"""Holding domain model (derived state)."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Holding:
    """
    Running position for one symbol.

    IMPORTANT: Never edit directly; always derived from the ledger by the
    holding ledger functions or a replay.
    """

    symbol: str
    available_quantity: int = 0
    avg_cost_per_share: Decimal = field(default_factory=lambda: Decimal("0"))
    total_invested_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    # Exact cost of the shares still held; the average is derived from it
    remaining_cost: Decimal = field(default_factory=lambda: Decimal("0"))
    total_shares_bought: int = 0
    total_shares_sold: int = 0
    total_realized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    updated_at: Optional[datetime] = field(default=None)

    @property
    def is_open(self) -> bool:
        """Return True while shares are still held."""
        return self.available_quantity > 0

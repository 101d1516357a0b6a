"""View models for realized P/L reports."""

from dataclasses import dataclass, field
from decimal import Decimal

ZERO = Decimal("0")


@dataclass
class MonthlyPnL:
    """Realized P/L booked in one calendar month."""

    year: int
    month: int
    net_pnl: Decimal = ZERO
    total_profit: Decimal = ZERO
    total_loss: Decimal = ZERO
    sell_count: int = 0


@dataclass
class YearlyPnL:
    """Realized P/L booked in one calendar year."""

    year: int
    total_pnl: Decimal = ZERO
    total_transactions: int = 0
    total_charges: Decimal = ZERO
    monthly_breakdown: list[MonthlyPnL] = field(default_factory=list)


@dataclass
class ScriptPnL:
    """Lifetime trading figures for one symbol."""

    symbol: str
    total_pnl: Decimal
    total_quantity_traded: int
    total_invested: Decimal
    total_recovered: Decimal
    avg_buy_rate: Decimal
    avg_sell_rate: Decimal
    available_quantity: int
    current_avg_cost: Decimal

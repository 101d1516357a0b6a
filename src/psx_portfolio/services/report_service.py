"""Report service for realized P/L analytics."""

from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from psx_portfolio.core.exceptions import ValidationError
from psx_portfolio.domain.models import RealizedPnLFilter, RealizedPnLRecord, Transaction
from psx_portfolio.domain.views import MonthlyPnL, ScriptDetails, ScriptPnL, YearlyPnL
from psx_portfolio.repositories.protocols import UnitOfWork
from psx_portfolio.services.portfolio_engine import PortfolioEngine

ZERO = Decimal("0")
RATE_PLACES = Decimal("0.0001")


def _weighted_rate(transactions: list[Transaction]) -> Decimal:
    """Volume-weighted average rate, rounded to 4 dp."""
    quantity = sum(t.quantity for t in transactions)
    if quantity == 0:
        return ZERO
    value = sum((t.amount for t in transactions), ZERO)
    return (value / quantity).quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def _check_year(year: int) -> None:
    if not 1 <= year <= 9999:
        raise ValidationError(f"Invalid year: {year}")


def group_by_month(records: list[RealizedPnLRecord]) -> list[MonthlyPnL]:
    """Bucket P/L records into calendar months, oldest month first."""
    months: dict[tuple[int, int], MonthlyPnL] = {}
    for record in records:
        key = (record.sell_date.year, record.sell_date.month)
        month = months.get(key)
        if month is None:
            month = months[key] = MonthlyPnL(year=key[0], month=key[1])
        month.net_pnl += record.realized_pnl
        if record.realized_pnl > 0:
            month.total_profit += record.realized_pnl
        else:
            month.total_loss += record.realized_pnl
        month.sell_count += 1
    return [months[key] for key in sorted(months)]


class ReportService:
    """
    Service for realized P/L reporting.

    Read-only; every figure comes from stored transactions, holdings and
    realized P/L records.
    """

    def __init__(self, uow: UnitOfWork, portfolio_engine: PortfolioEngine):
        self._uow = uow
        self._portfolio = portfolio_engine

    def list_realized_pnl(self, filters: Optional[RealizedPnLFilter] = None) -> list[RealizedPnLRecord]:
        """Realized P/L history, newest sale first."""
        filters = filters or RealizedPnLFilter()
        if filters.date_from and filters.date_to and filters.date_from > filters.date_to:
            raise ValidationError("date_from must not be after date_to")
        return self._uow.realized_pnl.query(filters)

    def get_script_details(self, symbol: str) -> ScriptDetails:
        """Holding, transactions (newest first) and P/L records of one symbol."""
        holding = self._portfolio.get_holding(symbol)
        transactions = self._uow.transactions.list_by_symbol(holding.symbol)
        return ScriptDetails(
            holding=holding,
            transactions=list(reversed(transactions)),
            realized_pnl=self._uow.realized_pnl.query(RealizedPnLFilter(symbol=holding.symbol)),
        )

    def monthly_pnl(self, year: Optional[int] = None) -> list[MonthlyPnL]:
        """
        Monthly realized P/L.

        Losses are reported as a negative ``total_loss``; ``net_pnl`` is
        profit plus loss.
        """
        filters = RealizedPnLFilter()
        if year is not None:
            _check_year(year)
            filters = RealizedPnLFilter(date_from=date(year, 1, 1), date_to=date(year, 12, 31))
        return group_by_month(self._uow.realized_pnl.query(filters))

    def yearly_pnl(self, year: int) -> YearlyPnL:
        """Realized P/L, trade count and charges paid for one calendar year."""
        _check_year(year)
        records = self._uow.realized_pnl.query(
            RealizedPnLFilter(date_from=date(year, 1, 1), date_to=date(year, 12, 31))
        )
        transactions = [t for t in self._all_transactions() if t.trade_date.year == year]
        return YearlyPnL(
            year=year,
            total_pnl=sum((r.realized_pnl for r in records), ZERO),
            total_transactions=len(transactions),
            total_charges=sum((t.charges.total for t in transactions), ZERO),
            monthly_breakdown=group_by_month(records),
        )

    def script_wise_pnl(self) -> list[ScriptPnL]:
        """Lifetime figures per symbol, including closed positions, by symbol."""
        by_symbol: dict[str, list[Transaction]] = defaultdict(list)
        for txn in self._all_transactions():
            by_symbol[txn.symbol].append(txn)

        results = []
        for holding in sorted(self._uow.holdings.list_all(), key=lambda h: h.symbol):
            history = by_symbol.get(holding.symbol, [])
            buys = [t for t in history if t.is_buy]
            sells = [t for t in history if t.is_sell]
            results.append(
                ScriptPnL(
                    symbol=holding.symbol,
                    total_pnl=holding.total_realized_pnl,
                    total_quantity_traded=holding.total_shares_bought + holding.total_shares_sold,
                    total_invested=sum((t.net_amount for t in buys), ZERO),
                    total_recovered=sum((t.net_amount for t in sells), ZERO),
                    avg_buy_rate=_weighted_rate(buys),
                    avg_sell_rate=_weighted_rate(sells),
                    available_quantity=holding.available_quantity,
                    current_avg_cost=holding.avg_cost_per_share,
                )
            )
        return results

    def _all_transactions(self) -> list[Transaction]:
        transactions = []
        for symbol in self._uow.transactions.list_symbols():
            transactions.extend(self._uow.transactions.list_by_symbol(symbol))
        return transactions

"""Portfolio engine for deriving holdings and realized P/L from the ledger."""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from functools import reduce
from typing import Iterable, Optional

from psx_portfolio.core.clock import now_pkt
from psx_portfolio.core.exceptions import ConsistencyError, InsufficientQuantityError, NotFoundError
from psx_portfolio.core.locks import SymbolLocks, get_symbol_locks
from psx_portfolio.domain.models import (
    Holding,
    InvestedAmountPolicy,
    RealizedPnLRecord,
    Transaction,
    TransactionType,
)
from psx_portfolio.domain.views import PortfolioSummary
from psx_portfolio.repositories.protocols import UnitOfWork
from psx_portfolio.services.holding_ledger import apply_buy, apply_sell, check_sell
from psx_portfolio.services.pnl_recorder import build_record

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class ReplayState:
    """Holding and P/L records accumulated while folding a symbol's history."""

    holding: Optional[Holding] = None
    records: list[RealizedPnLRecord] = field(default_factory=list)


def _open_only(holdings: list[Holding]) -> list[Holding]:
    return [h for h in holdings if h.is_open]


def apply_transaction(
    state: ReplayState,
    txn: Transaction,
    policy: InvestedAmountPolicy = InvestedAmountPolicy.RETAIN,
    at: Optional[datetime] = None,
) -> ReplayState:
    """
    Apply one transaction to the state and return the next state.

    This single step is shared by the create path and by replay, so both
    produce the same holding. Uses the charges frozen on the transaction.
    Raises InsufficientQuantityError for an uncovered SELL.
    """
    if txn.txn_type == TransactionType.BUY:
        holding = apply_buy(state.holding, txn.symbol, txn.quantity, txn.net_amount, at)
        return ReplayState(holding=holding, records=state.records)

    current = check_sell(state.holding, txn.symbol, txn.quantity)
    record = build_record(txn, current.avg_cost_per_share)
    if at is not None:
        record = replace(record, created_at=at)
    holding = apply_sell(current, txn.symbol, txn.quantity, record.realized_pnl, policy, at)
    return ReplayState(holding=holding, records=[*state.records, record])


def replay(
    transactions: Iterable[Transaction],
    policy: InvestedAmountPolicy = InvestedAmountPolicy.RETAIN,
    at: Optional[datetime] = None,
) -> ReplayState:
    """
    Fold a symbol's transactions (already in replay order) from an empty state.

    A SELL that is not covered by the preceding history is a ConsistencyError;
    it is never clamped.
    """

    def step(state: ReplayState, txn: Transaction) -> ReplayState:
        try:
            return apply_transaction(state, txn, policy, at)
        except InsufficientQuantityError as exc:
            raise ConsistencyError(
                txn.symbol,
                f"SELL {txn.txn_id} of {exc.requested} shares on {txn.trade_date} "
                f"exceeds available quantity {exc.available}",
            ) from exc

    return reduce(step, transactions, ReplayState())


class PortfolioEngine:
    """
    Engine for computing portfolio state from the ledger.

    Rebuilds a symbol's holding and realized P/L records by replaying all of
    its transactions. Holdings are never edited directly; they are always
    derived from the source of truth (ledger).
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invested_amount_policy: InvestedAmountPolicy = InvestedAmountPolicy.RETAIN,
        locks: Optional[SymbolLocks] = None,
    ):
        self._uow = uow
        self._policy = invested_amount_policy
        self._locks = locks or get_symbol_locks()

    @property
    def policy(self) -> InvestedAmountPolicy:
        return self._policy

    def recalculate(self, symbol: str) -> Optional[Holding]:
        """
        Replace the stored state of ``symbol`` with a replay of its history.

        Runs inside the caller's unit of work and symbol lock; does not commit.
        The replay is computed before anything is discarded, so a
        ConsistencyError leaves the stored state untouched.
        """
        transactions = self._uow.transactions.list_by_symbol(symbol)
        state = replay(transactions, self._policy, at=now_pkt())

        self._uow.realized_pnl.delete_by_symbol(symbol)
        self._uow.holdings.delete(symbol)

        holding = None
        if state.holding is not None:
            holding = self._uow.holdings.save(state.holding)
        for record in state.records:
            self._uow.realized_pnl.add(record)

        logger.info(
            "Rebuilt %s from %d transaction(s): quantity=%s, realized records=%d",
            symbol,
            len(transactions),
            holding.available_quantity if holding else 0,
            len(state.records),
        )
        return holding

    def rebuild_symbol(self, symbol: str) -> Optional[Holding]:
        """
        Rebuild one symbol in its own unit of work.

        This is the authoritative method for deriving a symbol's state.
        Returns the rebuilt holding, or None when the symbol has no history.
        """
        symbol = symbol.strip().upper()
        with self._locks.hold(symbol):
            with self._uow:
                try:
                    holding = self.recalculate(symbol)
                except ConsistencyError:
                    logger.warning("Rebuild of %s aborted: inconsistent history", symbol)
                    raise
                self._uow.commit()
        return holding

    def rebuild_all(self) -> list[str]:
        """
        Rebuild every symbol with history or a stored holding. Returns the symbols.

        Symbols are rebuilt in alphabetical order, each in its own commit. A
        ConsistencyError stops the run: symbols before the failing one stay
        rebuilt, the failing one is rolled back and later ones are untouched.
        """
        symbols = set(self._uow.transactions.list_symbols())
        symbols.update(h.symbol for h in self._uow.holdings.list_all())
        for symbol in sorted(symbols):
            self.rebuild_symbol(symbol)
        return sorted(symbols)

    def get_holding(self, symbol: str) -> Holding:
        """Get the stored holding for a symbol."""
        symbol = symbol.strip().upper()
        holding = self._uow.holdings.get(symbol)
        if holding is None:
            raise NotFoundError("Holding", symbol)
        return holding

    def list_holdings(self, include_closed: bool = False) -> list[Holding]:
        """List holdings; closed (zero quantity) ones only on request."""
        holdings = self._uow.holdings.list_all()
        return holdings if include_closed else _open_only(holdings)

    def get_portfolio_summary(self, include_closed: bool = False) -> PortfolioSummary:
        """
        Aggregate totals over all stored holdings.

        Invested and realized totals include closed positions; recovered is the
        sum of SELL net proceeds across the whole ledger.
        """
        all_holdings = self.list_holdings(include_closed=True)
        open_holdings = _open_only(all_holdings)

        return PortfolioSummary(
            holdings=all_holdings if include_closed else open_holdings,
            total_invested=sum((h.total_invested_amount for h in all_holdings), ZERO),
            total_recovered=self._uow.transactions.total_net_amount(TransactionType.SELL),
            total_realized_pnl=sum((h.total_realized_pnl for h in all_holdings), ZERO),
            total_shares_held=sum(h.available_quantity for h in all_holdings),
            active_symbol_count=len(open_holdings),
        )

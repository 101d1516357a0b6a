"""Ledger service for transaction management."""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from psx_portfolio.core.clock import Clock, now_pkt, parse_trade_date, today_pkt
from psx_portfolio.core.exceptions import (
    ConsistencyError,
    InsufficientQuantityError,
    NotFoundError,
    ValidationError,
)
from psx_portfolio.core.locks import SymbolLocks, get_symbol_locks
from psx_portfolio.domain.models import Transaction, TransactionFilter, TransactionType
from psx_portfolio.domain.views import Page, TransactionDetail
from psx_portfolio.repositories.protocols import UnitOfWork
from psx_portfolio.services.charges import (
    ChargeSchedule,
    DEFAULT_SCHEDULE,
    compute_charges,
    compute_net_amount,
)
from psx_portfolio.services.holding_ledger import check_sell
from psx_portfolio.services.pnl_recorder import RealizedPnLRecorder
from psx_portfolio.services.portfolio_engine import PortfolioEngine, ReplayState, apply_transaction

logger = logging.getLogger(__name__)

SYMBOL_PATTERN = re.compile(r"^[A-Z0-9]{1,10}$")
MAX_RATE_PLACES = 4
# Rates are stored as NUMERIC(18, 4)
RATE_LIMIT = Decimal(10) ** 14
MAX_PAGE_SIZE = 500


def _decimal_places(value: Decimal) -> int:
    """Number of decimal places, ignoring trailing zeros."""
    _, digits, exponent = value.as_tuple()
    while exponent < 0 and len(digits) > 1 and digits[-1] == 0:
        digits = digits[:-1]
        exponent += 1
    return max(0, -exponent)


@dataclass
class TransactionCreate:
    """Input data for creating a transaction."""

    trade_date: Union[date, datetime, str]
    symbol: str
    txn_type: Union[TransactionType, str]
    quantity: int
    rate: Union[Decimal, str, int]


@dataclass(frozen=True)
class _ValidTrade:
    trade_date: date
    symbol: str
    txn_type: TransactionType
    quantity: int
    rate: Decimal


class LedgerService:
    """
    Service for managing the transaction ledger.

    Ledger is the source of truth. Every write runs in one unit of work while
    holding the lock of the affected symbol, and leaves the stored holding and
    realized P/L records equal to a replay of the symbol's history.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        portfolio_engine: PortfolioEngine,
        charge_schedule: ChargeSchedule = DEFAULT_SCHEDULE,
        clock: Clock = today_pkt,
        locks: Optional[SymbolLocks] = None,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        self._uow = uow
        self._engine = portfolio_engine
        self._schedule = charge_schedule
        self._clock = clock
        self._locks = locks or get_symbol_locks()
        self._max_page_size = max_page_size
        self._recorder = RealizedPnLRecorder(uow.realized_pnl)

    def create_transaction(self, data: TransactionCreate) -> Transaction:
        """
        Record a BUY or SELL.

        Charges are computed once and frozen on the transaction. A SELL must
        be covered by the current holding. A back-dated entry (older than the
        symbol's latest trade) rebuilds the symbol so the stored state still
        matches chronological order.

        Raises:
            ValidationError: malformed input
            InsufficientQuantityError: SELL exceeds the available quantity
        """
        trade = self._validate_transaction_create(data)

        amount = trade.quantity * trade.rate
        charges = compute_charges(trade.rate, amount, trade.quantity, self._schedule)
        net_amount = compute_net_amount(trade.txn_type, amount, charges)

        with self._locks.hold(trade.symbol):
            with self._uow:
                holding = self._uow.holdings.get_for_update(trade.symbol)
                if trade.txn_type == TransactionType.SELL:
                    try:
                        check_sell(holding, trade.symbol, trade.quantity)
                    except InsufficientQuantityError as exc:
                        logger.warning("Rejected SELL: %s", exc.message)
                        raise

                latest = self._uow.transactions.latest_trade_date(trade.symbol)
                now = now_pkt()
                created = self._uow.transactions.create(
                    Transaction(
                        txn_id=None,
                        trade_date=trade.trade_date,
                        symbol=trade.symbol,
                        txn_type=trade.txn_type,
                        quantity=trade.quantity,
                        rate=trade.rate,
                        amount=amount,
                        charges=charges,
                        net_amount=net_amount,
                        created_at=now,
                        updated_at=now,
                    )
                )

                if latest is not None and trade.trade_date < latest:
                    self._apply_backdated(created)
                else:
                    state = apply_transaction(
                        ReplayState(holding=holding), created, self._engine.policy, at=now
                    )
                    self._uow.holdings.save(state.holding)
                    if created.is_sell:
                        self._recorder.record_sale(
                            created, holding.avg_cost_per_share, record=state.records[-1]
                        )

                self._uow.commit()

        logger.info(
            "Created %s %s x%d @ %s (txn %s, net %s)",
            created.txn_type.value,
            created.symbol,
            created.quantity,
            created.rate,
            created.txn_id,
            created.net_amount,
        )
        return created

    def delete_transaction(self, txn_id: int) -> None:
        """
        Delete a transaction and rebuild its symbol from the remaining history.

        Raises:
            NotFoundError: unknown transaction id
            ConsistencyError: the remaining history contains an uncovered SELL;
                nothing is deleted
        """
        transaction = self._get_or_raise(txn_id)
        symbol = transaction.symbol

        with self._locks.hold(symbol):
            with self._uow:
                # Re-read under the lock; a concurrent delete may have won
                self._get_or_raise(txn_id)
                if transaction.is_sell:
                    self._uow.realized_pnl.delete_by_transaction(txn_id)
                self._uow.transactions.delete(txn_id)
                try:
                    self._engine.recalculate(symbol)
                except ConsistencyError:
                    logger.warning("Refused to delete txn %s: %s history would break", txn_id, symbol)
                    raise
                self._uow.commit()

        logger.info("Deleted txn %s (%s) and rebuilt holding", txn_id, symbol)

    def get_transaction(self, txn_id: int) -> TransactionDetail:
        """Get a transaction with the realized P/L record it produced, if any."""
        transaction = self._get_or_raise(txn_id)
        record = None
        if transaction.is_sell:
            record = self._uow.realized_pnl.get_by_transaction(txn_id)
        return TransactionDetail(transaction=transaction, realized_pnl=record)

    def query_transactions(self, filters: Optional[TransactionFilter] = None) -> Page[Transaction]:
        """Query transactions with filters, newest first."""
        filters = filters or TransactionFilter()
        if filters.page < 1:
            raise ValidationError("page must be at least 1")
        if filters.limit < 1 or filters.limit > self._max_page_size:
            raise ValidationError(f"limit must be between 1 and {self._max_page_size}")
        if filters.date_from and filters.date_to and filters.date_from > filters.date_to:
            raise ValidationError("date_from must not be after date_to")
        return self._uow.transactions.query(filters)

    def _apply_backdated(self, created: Transaction) -> None:
        try:
            self._engine.recalculate(created.symbol)
        except ConsistencyError as exc:
            shortfall = exc.__cause__
            logger.warning("Rejected back-dated %s for %s: %s", created.txn_type.value, created.symbol, exc)
            if isinstance(shortfall, InsufficientQuantityError):
                raise InsufficientQuantityError(
                    created.symbol, shortfall.requested, shortfall.available
                ) from exc
            raise

    def _get_or_raise(self, txn_id: int) -> Transaction:
        transaction = self._uow.transactions.get_by_id(txn_id)
        if not transaction:
            raise NotFoundError("Transaction", txn_id)
        return transaction

    def _validate_transaction_create(self, data: TransactionCreate) -> _ValidTrade:
        """Validate and normalize transaction creation input."""
        symbol = (data.symbol or "").strip().upper()
        if not SYMBOL_PATTERN.match(symbol):
            raise ValidationError("Symbol must be 1-10 letters or digits")

        try:
            txn_type = TransactionType(data.txn_type)
        except ValueError as exc:
            raise ValidationError(f"Transaction type must be BUY or SELL, got {data.txn_type!r}") from exc

        quantity = data.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError("Quantity must be a whole number of shares")
        if quantity <= 0:
            raise ValidationError("Quantity must be positive")

        try:
            rate = Decimal(str(data.rate))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid rate: {data.rate!r}") from exc
        if not rate.is_finite() or rate <= 0:
            raise ValidationError("Rate must be positive")
        if _decimal_places(rate) > MAX_RATE_PLACES:
            raise ValidationError(f"Rate allows at most {MAX_RATE_PLACES} decimal places")
        if rate >= RATE_LIMIT:
            raise ValidationError(f"Rate must be below {RATE_LIMIT:,}")

        trade_date = parse_trade_date(data.trade_date)
        if trade_date > self._clock():
            raise ValidationError(f"Trade date {trade_date} is in the future")

        return _ValidTrade(
            trade_date=trade_date,
            symbol=symbol,
            txn_type=txn_type,
            quantity=quantity,
            rate=rate,
        )

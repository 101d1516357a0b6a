"""SQLAlchemy implementation of TransactionRepository."""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from psx_portfolio.core.clock import now_pkt
from psx_portfolio.domain.models import Charges, Transaction, TransactionFilter, TransactionType
from psx_portfolio.domain.views import Page
from psx_portfolio.repositories.sqlalchemy.orm_models import TransactionORM


def _dec(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository. Flushes only; the unit of work commits."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction and return it with its id assigned."""
        orm_txn = self._to_orm(transaction)
        self._db.add(orm_txn)
        self._db.flush()
        return self._to_domain(orm_txn)

    def get_by_id(self, txn_id: int) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        orm_txn = self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id
        ).first()
        return self._to_domain(orm_txn) if orm_txn else None

    def delete(self, txn_id: int) -> None:
        """Delete a transaction; its realized P/L row goes with it (ON DELETE CASCADE)."""
        self._db.query(TransactionORM).filter(
            TransactionORM.txn_id == txn_id
        ).delete()
        self._db.flush()

    def list_by_symbol(self, symbol: str) -> list[Transaction]:
        """List a symbol's transactions in replay order (trade date, then id)."""
        query = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.symbol == symbol)
            .order_by(TransactionORM.trade_date, TransactionORM.txn_id)
        )
        return [self._to_domain(t) for t in query.all()]

    def list_symbols(self) -> list[str]:
        """List distinct symbols that have transactions."""
        rows = (
            self._db.query(TransactionORM.symbol)
            .distinct()
            .order_by(TransactionORM.symbol)
            .all()
        )
        return [row[0] for row in rows]

    def latest_trade_date(self, symbol: str) -> Optional[date]:
        """Most recent trade date recorded for a symbol."""
        return (
            self._db.query(func.max(TransactionORM.trade_date))
            .filter(TransactionORM.symbol == symbol)
            .scalar()
        )

    def query(self, filters: TransactionFilter) -> Page[Transaction]:
        """Query transactions with filters, newest first."""
        conditions = []
        if filters.symbol:
            conditions.append(TransactionORM.symbol == filters.symbol)
        if filters.side:
            conditions.append(TransactionORM.txn_type == filters.side)
        if filters.date_from:
            conditions.append(TransactionORM.trade_date >= filters.date_from)
        if filters.date_to:
            conditions.append(TransactionORM.trade_date <= filters.date_to)

        query = self._db.query(TransactionORM)
        if conditions:
            query = query.filter(and_(*conditions))

        total = query.count()
        rows = (
            query.order_by(TransactionORM.trade_date.desc(), TransactionORM.txn_id.desc())
            .offset(filters.offset)
            .limit(filters.limit)
            .all()
        )
        return Page(
            items=[self._to_domain(t) for t in rows],
            total=total,
            page=filters.page,
            limit=filters.limit,
        )

    def total_net_amount(self, txn_type: TransactionType) -> Decimal:
        """Sum of net amounts over all transactions of one side."""
        total = (
            self._db.query(func.coalesce(func.sum(TransactionORM.net_amount), 0))
            .filter(TransactionORM.txn_type == txn_type)
            .scalar()
        )
        return _dec(total)

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            trade_date=txn.trade_date,
            symbol=txn.symbol,
            txn_type=txn.txn_type,
            quantity=txn.quantity,
            rate=txn.rate,
            amount=txn.amount,
            commission=txn.charges.commission,
            tax=txn.charges.tax,
            depository_fee=txn.charges.depository_fee,
            total_charges=txn.charges.total,
            net_amount=txn.net_amount,
            created_at=txn.created_at or now_pkt(),
            updated_at=txn.updated_at,
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            trade_date=orm.trade_date,
            symbol=orm.symbol,
            txn_type=orm.txn_type,
            quantity=orm.quantity,
            rate=_dec(orm.rate),
            amount=_dec(orm.amount),
            charges=Charges(
                commission=_dec(orm.commission),
                tax=_dec(orm.tax),
                depository_fee=_dec(orm.depository_fee),
                total=_dec(orm.total_charges),
            ),
            net_amount=_dec(orm.net_amount),
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

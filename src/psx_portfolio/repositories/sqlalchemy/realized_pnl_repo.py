"""SQLAlchemy implementation of RealizedPnLRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from psx_portfolio.core.clock import now_pkt
from psx_portfolio.domain.models import RealizedPnLRecord, RealizedPnLFilter
from psx_portfolio.repositories.sqlalchemy.orm_models import RealizedPnLORM


class SqlAlchemyRealizedPnLRepository:
    """SQLAlchemy-backed, append-only realized P/L repository."""

    def __init__(self, db: Session):
        self._db = db

    def add(self, record: RealizedPnLRecord) -> RealizedPnLRecord:
        """Append a record and return it with its id assigned."""
        orm_record = RealizedPnLORM(
            transaction_id=record.transaction_id,
            symbol=record.symbol,
            sell_date=record.sell_date,
            quantity_sold=record.quantity_sold,
            sell_rate=record.sell_rate,
            avg_cost_basis=record.avg_cost_basis,
            gross_proceeds=record.gross_proceeds,
            net_proceeds=record.net_proceeds,
            cost_basis=record.cost_basis,
            realized_pnl=record.realized_pnl,
            pnl_percentage=record.pnl_percentage,
            created_at=record.created_at or now_pkt(),
        )
        self._db.add(orm_record)
        self._db.flush()
        return self._to_domain(orm_record)

    def get_by_transaction(self, txn_id: int) -> Optional[RealizedPnLRecord]:
        """Get the record produced by a SELL transaction."""
        orm_record = self._db.query(RealizedPnLORM).filter(
            RealizedPnLORM.transaction_id == txn_id
        ).first()
        return self._to_domain(orm_record) if orm_record else None

    def delete_by_transaction(self, txn_id: int) -> None:
        """Delete the record(s) produced by a transaction."""
        self._db.query(RealizedPnLORM).filter(
            RealizedPnLORM.transaction_id == txn_id
        ).delete()
        self._db.flush()

    def delete_by_symbol(self, symbol: str) -> None:
        """Delete all records for a symbol (for rebuild)."""
        self._db.query(RealizedPnLORM).filter(
            RealizedPnLORM.symbol == symbol
        ).delete()
        self._db.flush()

    def query(self, filters: RealizedPnLFilter) -> list[RealizedPnLRecord]:
        """Query records, newest sell date first."""
        conditions = []
        if filters.symbol:
            conditions.append(RealizedPnLORM.symbol == filters.symbol)
        if filters.date_from:
            conditions.append(RealizedPnLORM.sell_date >= filters.date_from)
        if filters.date_to:
            conditions.append(RealizedPnLORM.sell_date <= filters.date_to)

        query = self._db.query(RealizedPnLORM)
        if conditions:
            query = query.filter(and_(*conditions))

        query = query.order_by(RealizedPnLORM.sell_date.desc(), RealizedPnLORM.record_id.desc())
        return [self._to_domain(r) for r in query.all()]

    @staticmethod
    def _to_domain(orm: RealizedPnLORM) -> RealizedPnLRecord:
        """Convert ORM record to domain model."""
        return RealizedPnLRecord(
            record_id=orm.record_id,
            transaction_id=orm.transaction_id,
            symbol=orm.symbol,
            sell_date=orm.sell_date,
            quantity_sold=orm.quantity_sold,
            sell_rate=Decimal(str(orm.sell_rate)),
            avg_cost_basis=Decimal(str(orm.avg_cost_basis)),
            gross_proceeds=Decimal(str(orm.gross_proceeds)),
            net_proceeds=Decimal(str(orm.net_proceeds)),
            cost_basis=Decimal(str(orm.cost_basis)),
            realized_pnl=Decimal(str(orm.realized_pnl)),
            pnl_percentage=Decimal(str(orm.pnl_percentage)),
            created_at=orm.created_at,
        )

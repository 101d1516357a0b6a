"""SQLAlchemy implementation of HoldingRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from psx_portfolio.domain.models import Holding
from psx_portfolio.repositories.sqlalchemy.orm_models import HoldingORM


class SqlAlchemyHoldingRepository:
    """SQLAlchemy-backed holding repository for derived data."""

    def __init__(self, db: Session):
        self._db = db

    def get(self, symbol: str) -> Optional[Holding]:
        """Get the holding for a symbol."""
        orm_holding = self._db.query(HoldingORM).filter(HoldingORM.symbol == symbol).first()
        return self._to_domain(orm_holding) if orm_holding else None

    def get_for_update(self, symbol: str) -> Optional[Holding]:
        """Get the holding for a symbol with a row lock (ignored by SQLite)."""
        orm_holding = (
            self._db.query(HoldingORM)
            .filter(HoldingORM.symbol == symbol)
            .with_for_update()
            .first()
        )
        return self._to_domain(orm_holding) if orm_holding else None

    def list_all(self) -> list[Holding]:
        """List all holdings ordered by symbol."""
        orm_holdings = self._db.query(HoldingORM).order_by(HoldingORM.symbol).all()
        return [self._to_domain(h) for h in orm_holdings]

    def save(self, holding: Holding) -> Holding:
        """Insert or update a holding."""
        orm_holding = self._db.query(HoldingORM).filter(
            HoldingORM.symbol == holding.symbol
        ).first()

        if orm_holding is None:
            orm_holding = HoldingORM(symbol=holding.symbol)
            self._db.add(orm_holding)

        orm_holding.available_quantity = holding.available_quantity
        orm_holding.avg_cost_per_share = holding.avg_cost_per_share
        orm_holding.total_invested_amount = holding.total_invested_amount
        orm_holding.remaining_cost = holding.remaining_cost
        orm_holding.total_shares_bought = holding.total_shares_bought
        orm_holding.total_shares_sold = holding.total_shares_sold
        orm_holding.total_realized_pnl = holding.total_realized_pnl
        orm_holding.updated_at = holding.updated_at

        self._db.flush()
        return self._to_domain(orm_holding)

    def delete(self, symbol: str) -> None:
        """Delete the holding for a symbol (for rebuild)."""
        self._db.query(HoldingORM).filter(
            HoldingORM.symbol == symbol
        ).delete()
        self._db.flush()

    @staticmethod
    def _to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM holding to domain model."""
        return Holding(
            symbol=orm.symbol,
            available_quantity=orm.available_quantity or 0,
            avg_cost_per_share=Decimal(str(orm.avg_cost_per_share)) if orm.avg_cost_per_share else Decimal("0"),
            total_invested_amount=Decimal(str(orm.total_invested_amount)) if orm.total_invested_amount else Decimal("0"),
            remaining_cost=Decimal(str(orm.remaining_cost)) if orm.remaining_cost else Decimal("0"),
            total_shares_bought=orm.total_shares_bought or 0,
            total_shares_sold=orm.total_shares_sold or 0,
            total_realized_pnl=Decimal(str(orm.total_realized_pnl)) if orm.total_realized_pnl else Decimal("0"),
            updated_at=orm.updated_at,
        )

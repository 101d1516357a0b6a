"""Realized profit/loss computation and recording."""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from psx_portfolio.core.clock import now_pkt
from psx_portfolio.domain.models import Charges, RealizedPnLRecord, Transaction
from psx_portfolio.repositories.protocols import RealizedPnLRepository

logger = logging.getLogger(__name__)

PERCENT_PLACES = Decimal("0.0001")


@dataclass(frozen=True)
class SaleResult:
    """Derived amounts for one SELL."""

    gross_proceeds: Decimal
    net_proceeds: Decimal
    cost_basis: Decimal
    realized_pnl: Decimal
    pnl_percentage: Decimal


def compute_realized_pnl(
    quantity_sold: int,
    sell_rate: Decimal,
    avg_cost_basis: Decimal,
    sell_charges: Charges,
) -> SaleResult:
    """
    Compute gain or loss of a sale against the average cost basis.

    Amounts are exact; only the percentage is rounded. A zero cost basis
    reports 0%.
    """
    gross = quantity_sold * sell_rate
    net = gross - sell_charges.total
    cost = quantity_sold * avg_cost_basis
    pnl = net - cost
    if cost > 0:
        pct = (pnl / cost * 100).quantize(PERCENT_PLACES, rounding=ROUND_HALF_UP)
    else:
        pct = Decimal("0")
    return SaleResult(
        gross_proceeds=gross,
        net_proceeds=net,
        cost_basis=cost,
        realized_pnl=pnl,
        pnl_percentage=pct,
    )


def build_record(transaction: Transaction, avg_cost_basis: Decimal) -> RealizedPnLRecord:
    """Build the (unsaved) P/L record for a SELL transaction."""
    if not transaction.is_sell:
        raise ValueError("Only SELL transactions realize P/L")
    result = compute_realized_pnl(
        transaction.quantity,
        transaction.rate,
        avg_cost_basis,
        transaction.charges,
    )
    return RealizedPnLRecord(
        record_id=None,
        transaction_id=transaction.txn_id,
        symbol=transaction.symbol,
        sell_date=transaction.trade_date,
        quantity_sold=transaction.quantity,
        sell_rate=transaction.rate,
        avg_cost_basis=avg_cost_basis,
        gross_proceeds=result.gross_proceeds,
        net_proceeds=result.net_proceeds,
        cost_basis=result.cost_basis,
        realized_pnl=result.realized_pnl,
        pnl_percentage=result.pnl_percentage,
    )


class RealizedPnLRecorder:
    """Appends P/L records; never touches the holding (caller orchestrates)."""

    def __init__(self, pnl_repo: RealizedPnLRepository):
        self._pnl_repo = pnl_repo

    def record_sale(
        self,
        transaction: Transaction,
        avg_cost_basis: Decimal,
        record: Optional[RealizedPnLRecord] = None,
    ) -> RealizedPnLRecord:
        """
        Append the P/L record for a SELL.

        ``avg_cost_basis`` must be the holding's average cost before this
        sale is applied. A pre-built ``record`` may be passed to avoid
        computing it twice.
        """
        if record is None:
            record = build_record(transaction, avg_cost_basis)
        saved = self._pnl_repo.add(replace(record, created_at=now_pkt()))
        logger.debug(
            "Recorded realized P/L %s for %s (txn %s)",
            saved.realized_pnl,
            saved.symbol,
            saved.transaction_id,
        )
        return saved

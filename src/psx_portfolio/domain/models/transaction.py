"""Transaction and charge domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from psx_portfolio.domain.models.enums import TransactionType


@dataclass(frozen=True)
class Charges:
    """
    Broker and exchange charges for one trade.

    Frozen on the transaction at creation time; never recomputed later even if
    the charge schedule changes.
    """

    commission: Decimal
    tax: Decimal
    depository_fee: Decimal
    total: Decimal

    @classmethod
    def zero(cls) -> "Charges":
        return cls(Decimal("0"), Decimal("0"), Decimal("0"), Decimal("0"))


@dataclass(frozen=True)
class Transaction:
    """
    Ledger transaction entry (source of truth).

    - quantity is a whole number of shares
    - rate is the price per share, up to 4 decimal places
    - amount = quantity * rate
    - net_amount is the cash outflow for BUY (amount + charges)
      and the cash inflow for SELL (amount - charges)
    """

    txn_id: Optional[int]
    trade_date: date
    symbol: str
    txn_type: TransactionType
    quantity: int
    rate: Decimal
    amount: Decimal
    charges: Charges
    net_amount: Decimal
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            object.__setattr__(self, "txn_type", TransactionType(self.txn_type))

    @property
    def is_buy(self) -> bool:
        return self.txn_type == TransactionType.BUY

    @property
    def is_sell(self) -> bool:
        return self.txn_type == TransactionType.SELL

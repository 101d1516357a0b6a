"""Domain models package."""

from psx_portfolio.domain.models.enums import TransactionType, InvestedAmountPolicy
from psx_portfolio.domain.models.transaction import Transaction, Charges
from psx_portfolio.domain.models.holding import Holding
from psx_portfolio.domain.models.realized_pnl import RealizedPnLRecord
from psx_portfolio.domain.models.filters import (
    TransactionFilter,
    RealizedPnLFilter,
    DEFAULT_PAGE,
    DEFAULT_LIMIT,
)

__all__ = [
    "TransactionType",
    "InvestedAmountPolicy",
    "Transaction",
    "Charges",
    "Holding",
    "RealizedPnLRecord",
    "TransactionFilter",
    "RealizedPnLFilter",
    "DEFAULT_PAGE",
    "DEFAULT_LIMIT",
]

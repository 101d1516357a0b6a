"""Domain layer - pure business models with no external dependencies."""

from psx_portfolio.domain.models import (
    Transaction,
    Charges,
    Holding,
    RealizedPnLRecord,
    TransactionType,
    InvestedAmountPolicy,
    TransactionFilter,
    RealizedPnLFilter,
)

__all__ = [
    "Transaction",
    "Charges",
    "Holding",
    "RealizedPnLRecord",
    "TransactionType",
    "InvestedAmountPolicy",
    "TransactionFilter",
    "RealizedPnLFilter",
]

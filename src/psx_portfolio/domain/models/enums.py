"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Side of a ledger transaction."""

    BUY = "BUY"
    SELL = "SELL"


class InvestedAmountPolicy(str, Enum):
    """How a SELL affects a holding's total invested amount."""

    RETAIN = "RETAIN"  # Lifetime bought total, never reduced on sale
    REDUCE = "REDUCE"  # Shrinks by quantity sold at average cost

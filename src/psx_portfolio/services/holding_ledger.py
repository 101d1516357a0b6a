"""Holding ledger: BUY/SELL state transitions for a single symbol.

The functions here are pure. They never mutate the holding passed in; they
return the next state, so a rejected SELL leaves the caller's holding intact.
"""

from dataclasses import replace
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from psx_portfolio.core.exceptions import InsufficientQuantityError, ValidationError
from psx_portfolio.domain.models import Holding, InvestedAmountPolicy
from psx_portfolio.services.charges import round_money

AVG_COST_PLACES = Decimal("0.0001")


def round_avg_cost(value: Decimal) -> Decimal:
    """Round an average cost per share to 4 decimal places."""
    return value.quantize(AVG_COST_PLACES, rounding=ROUND_HALF_UP)


def apply_buy(
    holding: Optional[Holding],
    symbol: str,
    quantity: int,
    net_amount: Decimal,
    at: Optional[datetime] = None,
) -> Holding:
    """
    Add a BUY to a holding.

    ``net_amount`` is the full cash outflow including charges, so the average
    cost carries the charges paid. The average is always
    round4(remaining_cost / quantity); for a BUY-only history that is
    round4(sum(net) / sum(quantity)) in any order.
    """
    if quantity <= 0:
        raise ValidationError("BUY quantity must be positive")
    if net_amount <= 0:
        raise ValidationError("BUY net amount must be positive")

    if holding is None:
        return Holding(
            symbol=symbol,
            available_quantity=quantity,
            avg_cost_per_share=round_avg_cost(net_amount / quantity),
            total_invested_amount=net_amount,
            remaining_cost=net_amount,
            total_shares_bought=quantity,
            total_shares_sold=0,
            total_realized_pnl=Decimal("0"),
            updated_at=at,
        )

    remaining_cost = holding.remaining_cost + net_amount
    new_quantity = holding.available_quantity + quantity
    return replace(
        holding,
        available_quantity=new_quantity,
        avg_cost_per_share=round_avg_cost(remaining_cost / new_quantity),
        remaining_cost=remaining_cost,
        total_invested_amount=holding.total_invested_amount + net_amount,
        total_shares_bought=holding.total_shares_bought + quantity,
        updated_at=at,
    )


def check_sell(holding: Optional[Holding], symbol: str, quantity: int) -> Holding:
    """Return the holding if it can cover ``quantity``; raise otherwise."""
    available = holding.available_quantity if holding else 0
    if holding is None or available < quantity:
        raise InsufficientQuantityError(symbol, quantity, available)
    return holding


def apply_sell(
    holding: Optional[Holding],
    symbol: str,
    quantity: int,
    realized_pnl: Decimal,
    policy: InvestedAmountPolicy = InvestedAmountPolicy.RETAIN,
    at: Optional[datetime] = None,
) -> Holding:
    """
    Remove sold shares from a holding and book the realized P/L.

    The average cost never changes on a SELL; the remaining cost drops by the
    sold shares at average cost and is zero once the position closes. The
    invested amount follows ``policy``: RETAIN keeps the lifetime bought
    total, REDUCE takes out the sold shares at average cost and zeroes it
    when the position closes.
    """
    if quantity <= 0:
        raise ValidationError("SELL quantity must be positive")
    holding = check_sell(holding, symbol, quantity)

    remaining = holding.available_quantity - quantity
    if remaining == 0:
        remaining_cost = Decimal("0")
    else:
        remaining_cost = max(
            Decimal("0"),
            holding.remaining_cost - quantity * holding.avg_cost_per_share,
        )
    invested = holding.total_invested_amount
    if policy == InvestedAmountPolicy.REDUCE:
        if remaining == 0:
            invested = Decimal("0")
        else:
            invested = max(
                Decimal("0"),
                invested - round_money(quantity * holding.avg_cost_per_share),
            )

    return replace(
        holding,
        available_quantity=remaining,
        remaining_cost=remaining_cost,
        total_invested_amount=invested,
        total_shares_sold=holding.total_shares_sold + quantity,
        total_realized_pnl=holding.total_realized_pnl + realized_pnl,
        updated_at=at,
    )

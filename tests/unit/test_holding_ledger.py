"""
Unit tests for the holding ledger state transitions.

Tests cover:
- First BUY and averaging on later BUYs
- SELL keeps average cost and books realized P/L
- Sell-to-zero and oversell boundaries
- Invested amount under RETAIN and REDUCE policies
- Remaining cost pool behind the average
"""

from decimal import Decimal

import pytest

from psx_portfolio.core.exceptions import InsufficientQuantityError, ValidationError
from psx_portfolio.domain.models import Holding, InvestedAmountPolicy
from psx_portfolio.services.holding_ledger import (
    apply_buy,
    apply_sell,
    check_sell,
    round_avg_cost,
)


@pytest.fixture
def trg_holding() -> Holding:
    """100 TRG bought for 8565.25 including charges."""
    return apply_buy(None, "TRG", 100, Decimal("8565.25"))


# =============================================================================
# BUY TESTS
# =============================================================================


class TestApplyBuy:
    """Tests for adding shares."""

    def test_first_buy_creates_holding(self, trg_holding: Holding):
        """
        GIVEN no holding
        WHEN 100 shares are bought for a net 8565.25
        THEN average cost is 85.6525 and invested is the net amount
        """
        assert trg_holding.symbol == "TRG"
        assert trg_holding.available_quantity == 100
        assert trg_holding.avg_cost_per_share == Decimal("85.6525")
        assert trg_holding.total_invested_amount == Decimal("8565.25")
        assert trg_holding.total_shares_bought == 100
        assert trg_holding.total_shares_sold == 0
        assert trg_holding.total_realized_pnl == Decimal("0")

    def test_second_buy_averages_cost(self, trg_holding: Holding):
        """
        GIVEN 100 shares at 85.6525
        WHEN 100 more are bought for 9000
        THEN average is (8565.25 + 9000) / 200 rounded to 4 dp
        """
        holding = apply_buy(trg_holding, "TRG", 100, Decimal("9000"))

        assert holding.available_quantity == 200
        assert holding.avg_cost_per_share == Decimal("87.8263")
        assert holding.total_invested_amount == Decimal("17565.25")
        assert holding.total_shares_bought == 200

    def test_buy_does_not_mutate_input(self, trg_holding: Holding):
        apply_buy(trg_holding, "TRG", 10, Decimal("1000"))
        assert trg_holding.available_quantity == 100

    def test_buy_after_position_closed_starts_fresh_average(self, trg_holding: Holding):
        """
        GIVEN a fully sold position
        WHEN shares are bought again
        THEN the average is the new purchase's cost only
        """
        closed = apply_sell(trg_holding, "TRG", 100, Decimal("500"))
        reopened = apply_buy(closed, "TRG", 10, Decimal("1000"))

        assert reopened.available_quantity == 10
        assert reopened.avg_cost_per_share == Decimal("100.0000")
        assert reopened.total_realized_pnl == Decimal("500")

    @pytest.mark.parametrize("quantity,net", [(0, Decimal("10")), (-5, Decimal("10")), (5, Decimal("0"))])
    def test_buy_rejects_non_positive_values(self, quantity: int, net: Decimal):
        with pytest.raises(ValidationError):
            apply_buy(None, "TRG", quantity, net)


# =============================================================================
# SELL TESTS
# =============================================================================


class TestApplySell:
    """Tests for removing shares."""

    def test_sell_keeps_average_and_books_pnl(self, trg_holding: Holding):
        holding = apply_sell(trg_holding, "TRG", 50, Decimal("309.185"))

        assert holding.available_quantity == 50
        assert holding.avg_cost_per_share == Decimal("85.6525")
        assert holding.total_shares_sold == 50
        assert holding.total_realized_pnl == Decimal("309.185")

    def test_sell_to_zero_retains_holding(self, trg_holding: Holding):
        """
        GIVEN 100 shares held
        WHEN exactly 100 are sold
        THEN the holding remains with quantity 0 and the same average
        """
        holding = apply_sell(trg_holding, "TRG", 100, Decimal("10"))

        assert holding.available_quantity == 0
        assert not holding.is_open
        assert holding.avg_cost_per_share == Decimal("85.6525")

    def test_oversell_raises_and_leaves_holding_unchanged(self, trg_holding: Holding):
        """
        GIVEN 100 shares held
        WHEN 101 are sold
        THEN InsufficientQuantityError names requested and available
        """
        with pytest.raises(InsufficientQuantityError) as exc_info:
            apply_sell(trg_holding, "TRG", 101, Decimal("0"))

        assert exc_info.value.requested == 101
        assert exc_info.value.available == 100
        assert exc_info.value.code == "INSUFFICIENT_QUANTITY"
        assert trg_holding.available_quantity == 100

    def test_sell_without_holding_raises(self):
        with pytest.raises(InsufficientQuantityError) as exc_info:
            check_sell(None, "OGDC", 1)
        assert exc_info.value.available == 0

    def test_sell_rejects_zero_quantity(self, trg_holding: Holding):
        with pytest.raises(ValidationError):
            apply_sell(trg_holding, "TRG", 0, Decimal("0"))


# =============================================================================
# INVESTED AMOUNT POLICY TESTS
# =============================================================================


class TestInvestedAmountPolicy:
    """Tests for how a SELL affects the invested amount."""

    def test_retain_keeps_lifetime_invested(self, trg_holding: Holding):
        holding = apply_sell(trg_holding, "TRG", 50, Decimal("1"), InvestedAmountPolicy.RETAIN)
        assert holding.total_invested_amount == Decimal("8565.25")

    def test_reduce_removes_sold_cost(self, trg_holding: Holding):
        """
        GIVEN invested 8565.25 at average 85.6525
        WHEN 50 shares are sold under REDUCE
        THEN invested drops by round2(50 * 85.6525) = 4282.63
        """
        holding = apply_sell(trg_holding, "TRG", 50, Decimal("1"), InvestedAmountPolicy.REDUCE)
        assert holding.total_invested_amount == Decimal("4282.62")

    def test_reduce_zeroes_closed_position(self, trg_holding: Holding):
        holding = apply_sell(trg_holding, "TRG", 100, Decimal("1"), InvestedAmountPolicy.REDUCE)
        assert holding.total_invested_amount == Decimal("0")

    def test_reduce_never_goes_negative(self):
        holding = Holding(
            symbol="TRG",
            available_quantity=10,
            avg_cost_per_share=Decimal("100"),
            total_invested_amount=Decimal("50"),
        )
        reduced = apply_sell(holding, "TRG", 5, Decimal("0"), InvestedAmountPolicy.REDUCE)
        assert reduced.total_invested_amount == Decimal("0")


# =============================================================================
# REMAINING COST TESTS
# =============================================================================


class TestRemainingCost:
    """Tests for the exact cost pool behind the average."""

    def test_buy_adds_net_amount(self, trg_holding: Holding):
        holding = apply_buy(trg_holding, "TRG", 100, Decimal("9000"))
        assert holding.remaining_cost == Decimal("17565.25")

    def test_sell_removes_sold_shares_at_average(self, trg_holding: Holding):
        """
        GIVEN 100 shares costing 8565.25 at average 85.6525
        WHEN 50 are sold
        THEN remaining cost drops by exactly 50 * 85.6525, under either policy
        """
        for policy in InvestedAmountPolicy:
            holding = apply_sell(trg_holding, "TRG", 50, Decimal("1"), policy)
            assert holding.remaining_cost == Decimal("4282.625")

    def test_close_resets_to_zero(self, trg_holding: Holding):
        holding = apply_sell(trg_holding, "TRG", 100, Decimal("1"))
        assert holding.remaining_cost == Decimal("0")

    def test_buy_after_partial_sell_averages_remaining_cost(self, trg_holding: Holding):
        """
        GIVEN 50 shares left with remaining cost 4282.625
        WHEN 100 are bought for 9000
        THEN average is round4(13282.625 / 150)
        """
        partial = apply_sell(trg_holding, "TRG", 50, Decimal("1"))
        holding = apply_buy(partial, "TRG", 100, Decimal("9000"))

        assert holding.remaining_cost == Decimal("13282.625")
        assert holding.avg_cost_per_share == Decimal("88.5508")

    def test_average_does_not_depend_on_buy_order(self):
        """
        GIVEN a BUY whose average rounds and a tiny second BUY
        WHEN applied in either order
        THEN both give round4(10.0002 / 4), with no rounding carried over
        """
        forwards = apply_buy(apply_buy(None, "TRG", 3, Decimal("10")), "TRG", 1, Decimal("0.0002"))
        backwards = apply_buy(apply_buy(None, "TRG", 1, Decimal("0.0002")), "TRG", 3, Decimal("10"))

        assert forwards.avg_cost_per_share == Decimal("2.5001")
        assert backwards.avg_cost_per_share == Decimal("2.5001")


def test_round_avg_cost_half_up():
    assert round_avg_cost(Decimal("87.82625")) == Decimal("87.8263")

"""PSX trading charge calculator."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from psx_portfolio.domain.models import Charges, TransactionType

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round a currency amount to 2 decimal places, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ChargeSchedule:
    """
    Broker commission, sales tax and CDC fee rates.

    Commission is tiered on the per-share rate: above ``commission_threshold``
    it is a percentage of the gross amount, otherwise a flat amount per share.
    Sales tax is charged on the commission; the depository (CDC) fee is per share.
    """

    commission_threshold: Decimal = Decimal("33.33")
    commission_rate: Decimal = Decimal("0.0015")
    commission_per_share: Decimal = Decimal("0.05")
    sales_tax_rate: Decimal = Decimal("0.15")
    depository_fee_per_share: Decimal = Decimal("0.005")

    @classmethod
    def from_settings(cls, settings) -> "ChargeSchedule":
        return cls(
            commission_threshold=settings.commission_threshold,
            commission_rate=settings.commission_rate,
            commission_per_share=settings.commission_per_share,
            sales_tax_rate=settings.sales_tax_rate,
            depository_fee_per_share=settings.depository_fee_per_share,
        )


DEFAULT_SCHEDULE = ChargeSchedule()


def compute_commission(
    rate: Decimal,
    gross_amount: Decimal,
    quantity: int,
    schedule: ChargeSchedule = DEFAULT_SCHEDULE,
) -> Decimal:
    """Broker commission for one trade, rounded to 2 dp."""
    if rate > schedule.commission_threshold:
        commission = gross_amount * schedule.commission_rate
    else:
        commission = Decimal(quantity) * schedule.commission_per_share
    return round_money(commission)


def compute_charges(
    rate: Decimal,
    gross_amount: Decimal,
    quantity: int,
    schedule: ChargeSchedule = DEFAULT_SCHEDULE,
) -> Charges:
    """
    Compute the charges for a trade.

    Each component is rounded once, and the total is the sum of the rounded
    components so a stored charge breakdown always adds up.
    """
    commission = compute_commission(rate, gross_amount, quantity, schedule)
    tax = round_money(commission * schedule.sales_tax_rate)
    depository_fee = round_money(Decimal(quantity) * schedule.depository_fee_per_share)
    return Charges(
        commission=commission,
        tax=tax,
        depository_fee=depository_fee,
        total=commission + tax + depository_fee,
    )


def compute_net_amount(txn_type: TransactionType, gross_amount: Decimal, charges: Charges) -> Decimal:
    """Cash outflow for a BUY, cash inflow for a SELL."""
    if txn_type == TransactionType.BUY:
        return gross_amount + charges.total
    return gross_amount - charges.total

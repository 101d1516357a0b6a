"""Time utilities for Pakistan Stock Exchange trading dates."""

from datetime import date, datetime
from typing import Callable

import pytz
from dateutil import parser as date_parser

from psx_portfolio.core.exceptions import ValidationError

PSX_TZ = pytz.timezone("Asia/Karachi")

# Supplies "today" to services so future-date checks can be pinned in tests.
Clock = Callable[[], date]


def now_pkt() -> datetime:
    """Return current time in Asia/Karachi timezone."""
    return datetime.now(PSX_TZ)


def today_pkt() -> date:
    """Return the current calendar date at the exchange."""
    return now_pkt().date()


def to_pkt(dt: datetime) -> datetime:
    """Convert a datetime to Asia/Karachi timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already exchange local time
        return PSX_TZ.localize(dt)
    return dt.astimezone(PSX_TZ)


def parse_trade_date(value: object) -> date:
    """
    Parse a trade date from a date, datetime or string.

    Aware datetimes are converted to exchange local time before the date is
    taken, so an evening UTC timestamp lands on the next Karachi day.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        try:
            dt = date_parser.parse(value)
        except (ValueError, OverflowError) as exc:
            raise ValidationError(f"Invalid date: {value!r}") from exc
    else:
        raise ValidationError(f"Invalid date: {value!r}")

    return to_pkt(dt).date()

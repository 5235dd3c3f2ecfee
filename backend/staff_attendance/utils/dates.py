"""
Calendar helpers shared by the attendance and report services.
"""

import calendar
from datetime import date, timedelta
from typing import Iterator, Tuple


def month_bounds(year: int, month_index: int) -> Tuple[date, date]:
    """
    First and last day of a month.

    Args:
        year: Four-digit year
        month_index: Zero-based month (0 = January), as sent by the web client
    """
    month = month_index + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def days_between(start: date, end: date) -> int:
    """Inclusive day count, 0 when end precedes start."""
    return max((end - start).days + 1, 0)

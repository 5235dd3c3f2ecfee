"""
Effective attendance status.

Precedence for a (staff, date) pair: an explicit ledger record wins, then a
declared holiday, then a weekend day; anything else is unmarked (None).
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from staff_attendance.core.config import settings
from staff_attendance.models.attendance import AttendanceStatus


def is_weekend(day: date, weekend_days: Optional[Iterable[int]] = None) -> bool:
    """True when the ISO weekday of ``day`` is a configured weekend day (Sunday by default)."""
    days = settings.WEEKEND_DAYS if weekend_days is None else weekend_days
    return day.isoweekday() in set(days)


def calendar_status(holiday: bool, weekend: bool) -> Optional[AttendanceStatus]:
    """Status implied by the calendar alone; holiday beats weekend."""
    if holiday:
        return AttendanceStatus.HOLIDAY
    if weekend:
        return AttendanceStatus.WEEKEND
    return None


def resolve_status(
    recorded: Optional[AttendanceStatus],
    holiday: bool,
    weekend: bool,
) -> Optional[AttendanceStatus]:
    """
    Resolve the effective status of one staff member on one day.

    Args:
        recorded: Status stored in the ledger, if any
        holiday: Whether the date is a declared holiday
        weekend: Whether the date is a weekend day

    Returns:
        The effective status, or None for unmarked
    """
    if recorded is not None:
        return AttendanceStatus(recorded)
    return calendar_status(holiday, weekend)


def status_to_store(
    requested: AttendanceStatus,
    holiday: bool,
    weekend: bool,
    enforce_calendar: bool = True,
) -> AttendanceStatus:
    """
    Status actually written for a manual mark.

    With ``enforce_calendar`` a mark on a holiday or weekend is stored as
    holiday/weekend whatever was requested.
    """
    if enforce_calendar:
        forced = calendar_status(holiday, weekend)
        if forced is not None:
            return forced
    return requested


def attendance_percent(present: int, halfday: int, denominator: int) -> int:
    """
    round(100 * (present + 0.5 * halfday) / denominator), halves rounded up.

    Returns 0 when there is nothing to divide by.
    """
    if denominator <= 0:
        return 0
    ratio = (Decimal(present) + Decimal(halfday) / 2) * 100 / Decimal(denominator)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

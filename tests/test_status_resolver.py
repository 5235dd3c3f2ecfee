"""
Tests for status precedence, the write-time calendar override and percentages.
"""

from datetime import date

import pytest

from staff_attendance.models.attendance import AttendanceStatus
from staff_attendance.services.status_resolver import (
    attendance_percent,
    calendar_status,
    is_weekend,
    resolve_status,
    status_to_store,
)
from staff_attendance.utils.dates import days_between, iter_days, month_bounds

SUNDAY = date(2024, 1, 7)
SATURDAY = date(2024, 1, 6)
MONDAY = date(2024, 1, 15)


def test_sunday_is_weekend_by_default():
    assert is_weekend(SUNDAY)
    assert not is_weekend(SATURDAY)
    assert not is_weekend(MONDAY)


def test_weekend_days_are_configurable():
    assert is_weekend(SATURDAY, weekend_days=[6, 7])
    assert not is_weekend(SUNDAY, weekend_days=[5])


def test_recorded_status_wins_over_calendar():
    assert resolve_status(AttendanceStatus.PRESENT, holiday=True, weekend=True) == AttendanceStatus.PRESENT


def test_holiday_beats_weekend_when_unrecorded():
    assert resolve_status(None, holiday=True, weekend=True) == AttendanceStatus.HOLIDAY


def test_weekend_when_unrecorded():
    assert resolve_status(None, holiday=False, weekend=True) == AttendanceStatus.WEEKEND


def test_unmarked_working_day():
    assert resolve_status(None, holiday=False, weekend=False) is None
    assert calendar_status(False, False) is None


def test_override_forces_calendar_status():
    assert status_to_store(AttendanceStatus.PRESENT, holiday=True, weekend=False) == AttendanceStatus.HOLIDAY
    assert status_to_store(AttendanceStatus.ABSENT, holiday=False, weekend=True) == AttendanceStatus.WEEKEND
    assert status_to_store(AttendanceStatus.HALFDAY, holiday=False, weekend=False) == AttendanceStatus.HALFDAY


def test_override_can_be_disabled():
    stored = status_to_store(AttendanceStatus.PRESENT, holiday=True, weekend=True, enforce_calendar=False)
    assert stored == AttendanceStatus.PRESENT


@pytest.mark.parametrize(
    "present, halfday, denominator, expected",
    [
        (1, 1, 2, 75),
        (0, 1, 1, 50),
        (1, 0, 3, 33),
        (2, 0, 3, 67),
        (1, 0, 8, 13),  # 12.5 rounds up
        (5, 0, 5, 100),
        (3, 0, 0, 0),
    ],
)
def test_attendance_percent(present, halfday, denominator, expected):
    assert attendance_percent(present, halfday, denominator) == expected


def test_month_bounds_uses_zero_based_month():
    assert month_bounds(2024, 0) == (date(2024, 1, 1), date(2024, 1, 31))
    assert month_bounds(2024, 1) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2023, 11) == (date(2023, 12, 1), date(2023, 12, 31))


def test_day_iteration_is_inclusive():
    days = list(iter_days(date(2024, 1, 30), date(2024, 2, 2)))
    assert days == [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1), date(2024, 2, 2)]
    assert days_between(date(2024, 1, 30), date(2024, 2, 2)) == 4
    assert days_between(date(2024, 2, 2), date(2024, 1, 30)) == 0

"""
Tabular layout of the monthly report shared by the spreadsheet and PDF exports.
"""

import calendar
from typing import List, Optional

from staff_attendance.models.attendance import AttendanceStatus
from staff_attendance.schemas.report import MonthlyReport, MonthlyStaffRow

STATUS_CODES = {
    AttendanceStatus.PRESENT: "P",
    AttendanceStatus.ABSENT: "A",
    AttendanceStatus.HALFDAY: "H",
    AttendanceStatus.HOLIDAY: "Ho",
    AttendanceStatus.WEEKEND: "W",
}

LEGEND = "P = Present, A = Absent, H = Half Day, Ho = Holiday, W = Weekend"

LEADING_COLUMNS = ["#", "Name", "Staff ID", "Department", "Position"]
TRAILING_COLUMNS = ["Present", "Absent", "Half Days", "%"]


def status_code(status: Optional[AttendanceStatus]) -> str:
    return "" if status is None else STATUS_CODES[AttendanceStatus(status)]


def month_title(report: MonthlyReport) -> str:
    """e.g. 'Attendance Report - January 2024 (Sales)'."""
    title = f"Attendance Report - {calendar.month_name[report.month + 1]} {report.year}"
    if report.department:
        title += f" ({report.department})"
    return title


def export_filename(report: MonthlyReport, extension: str) -> str:
    return f"attendance_{report.year}_{report.month + 1:02d}.{extension}"


def header_row(report: MonthlyReport) -> List[str]:
    days = [str(day) for day in range(1, report.days_in_month + 1)]
    return LEADING_COLUMNS + days + TRAILING_COLUMNS


def staff_row(position: int, row: MonthlyStaffRow) -> list:
    return (
        [position, row.name, row.staff_id, row.department, row.position]
        + [status_code(status) for status in row.days]
        + [row.counts.present, row.counts.absent, row.counts.halfday, row.percent]
    )

"""
Report Pydantic schemas: dashboard, monthly report and overview.
"""

from datetime import date
from typing import List, Optional

from pydantic import Field

from staff_attendance.models.attendance import AttendanceStatus
from staff_attendance.schemas.common import CamelModel


class StatusCounts(CamelModel):
    """Tally of effective statuses."""
    present: int = 0
    absent: int = 0
    halfday: int = 0
    holiday: int = 0
    weekend: int = 0
    unmarked: int = 0

    def add(self, status: Optional[AttendanceStatus]) -> None:
        key = "unmarked" if status is None else AttendanceStatus(status).value
        setattr(self, key, getattr(self, key) + 1)


class DashboardStaffRow(CamelModel):
    staff_id: str
    name: str
    department: str = Field("", alias="dept")
    status: Optional[AttendanceStatus] = None


class DashboardReport(CamelModel):
    """One day across the visible roster."""
    date: date
    holiday: Optional[str] = None
    total_staff: int
    working_staff: int
    counts: StatusCounts
    percent: int
    staff: List[DashboardStaffRow]


class MonthlyStaffRow(CamelModel):
    staff_id: str
    name: str
    department: str = Field("", alias="dept")
    position: str = ""
    days: List[Optional[AttendanceStatus]]
    counts: StatusCounts
    working_days: int
    percent: int


class MonthlyReport(CamelModel):
    """Per-staff day grid for one month."""
    year: int
    month: int
    days_in_month: int
    department: Optional[str] = Field(None, alias="dept")
    holidays: List[str]
    rows: List[MonthlyStaffRow]
    totals: StatusCounts


class OverviewRow(CamelModel):
    rank: int
    staff_id: str
    name: str
    department: str = Field("", alias="dept")
    counts: StatusCounts
    total_days: int
    percent: int


class OverviewReport(CamelModel):
    """Ranked per-staff summary over a date range."""
    start: date = Field(..., alias="from")
    end: date = Field(..., alias="to")
    total_days: int
    rows: List[OverviewRow]

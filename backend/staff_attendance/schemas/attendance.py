"""
Attendance Pydantic schemas for request/response validation.
"""

from datetime import date
from typing import Dict, Optional

from pydantic import Field, field_validator

from staff_attendance.models.attendance import AttendanceStatus
from staff_attendance.schemas.common import CamelModel

# {staff_id: status}
DayAttendance = Dict[str, AttendanceStatus]

# {"YYYY-MM-DD": {staff_id: status}}
MonthAttendance = Dict[str, DayAttendance]


class AttendanceKey(CamelModel):
    """Identifies one ledger pair."""
    staff_id: str = Field(..., min_length=1, max_length=50)
    date: date

    @field_validator("staff_id", mode="before")
    @classmethod
    def strip_staff_id(cls, value):
        return value.strip() if isinstance(value, str) else value


class AttendanceMark(AttendanceKey):
    """Schema for marking a staff member on a day."""
    status: AttendanceStatus


class BulkMark(CamelModel):
    """Schema for marking every staff member (optionally one department) on a day."""
    date: date
    status: AttendanceStatus = AttendanceStatus.PRESENT
    department: Optional[str] = Field(None, alias="dept")


class AttendanceChange(CamelModel):
    """Outcome of a single mark/unmark call."""
    staff_id: str
    date: date
    status: Optional[AttendanceStatus] = None
    action: str


class BulkMarkResult(CamelModel):
    date: date
    status: AttendanceStatus
    marked: int


class MyReportResponse(CamelModel):
    """One employee's month."""
    staff_id: str
    year: int
    month: int
    days: Dict[str, Optional[AttendanceStatus]]

"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from staff_attendance.models.staff import Staff
from staff_attendance.models.holiday import Holiday
from staff_attendance.models.attendance import AttendanceRecord, AttendanceStatus
from staff_attendance.models.user import User, UserRole

__all__ = [
    "Staff",
    "Holiday",
    "AttendanceRecord",
    "AttendanceStatus",
    "User",
    "UserRole",
]

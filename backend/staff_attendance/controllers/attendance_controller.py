"""
Attendance controller.
"""

from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.controllers.base_controller import BaseController
from staff_attendance.core.access import Principal
from staff_attendance.schemas.attendance import (
    AttendanceChange,
    AttendanceKey,
    AttendanceMark,
    BulkMark,
    BulkMarkResult,
    DayAttendance,
    MonthAttendance,
    MyReportResponse,
)
from staff_attendance.services.attendance_service import AttendanceService


class AttendanceController(BaseController):
    """Controller for attendance ledger operations."""

    def __init__(self, session: AsyncSession):
        self.attendance_service = AttendanceService(session)

    async def get_day(self, principal: Principal, day: date) -> DayAttendance:
        return await self.attendance_service.get_day(principal, day)

    async def get_month(self, principal: Principal, year: int, month: int) -> MonthAttendance:
        return await self.attendance_service.get_month(principal, year, month)

    async def toggle(self, principal: Principal, mark: AttendanceMark) -> AttendanceChange:
        """Mark, or unmark when the same status is already recorded."""
        return await self.attendance_service.set_status(principal, mark, toggle=True)

    async def set_status(self, principal: Principal, mark: AttendanceMark) -> AttendanceChange:
        return await self.attendance_service.set_status(principal, mark, toggle=False)

    async def bulk_mark(self, principal: Principal, bulk: BulkMark) -> BulkMarkResult:
        return await self.attendance_service.bulk_mark(principal, bulk)

    async def unmark(self, principal: Principal, key: AttendanceKey) -> AttendanceChange:
        return await self.attendance_service.unmark(principal, key)

    async def my_report(self, principal: Principal, year: int, month: int) -> MyReportResponse:
        return await self.attendance_service.my_report(principal, year, month)

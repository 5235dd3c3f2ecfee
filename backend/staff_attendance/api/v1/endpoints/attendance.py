"""
Attendance ledger endpoints.
Reads auto-fill holiday and weekend rows before answering.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.api.v1.middleware import require_authentication
from staff_attendance.controllers.attendance_controller import AttendanceController
from staff_attendance.core.access import Principal
from staff_attendance.db.session import get_db
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
from staff_attendance.schemas.common import ApiResponse, ok

router = APIRouter()


@router.get("/attendance", response_model=ApiResponse[DayAttendance])
async def get_day(
    day: date = Query(..., alias="date", description="YYYY-MM-DD"),
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """{staffId: status} for one day."""
    controller = AttendanceController(db)
    return ok(await controller.get_day(principal, day))


@router.get("/attendance/month", response_model=ApiResponse[MonthAttendance])
async def get_month(
    year: int = Query(..., ge=1900, le=2100),
    month: int = Query(..., ge=0, le=11, description="0 = January"),
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """{"YYYY-MM-DD": {staffId: status}} for one month."""
    controller = AttendanceController(db)
    return ok(await controller.get_month(principal, year, month))


@router.post("/attendance", response_model=ApiResponse[AttendanceChange])
async def toggle_attendance(
    mark: AttendanceMark,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Mark a status; submitting the status already recorded unmarks the day."""
    controller = AttendanceController(db)
    return ok(await controller.toggle(principal, mark))


@router.put("/attendance", response_model=ApiResponse[AttendanceChange])
async def set_attendance(
    mark: AttendanceMark,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Record a status, replacing any existing one."""
    controller = AttendanceController(db)
    return ok(await controller.set_status(principal, mark))


@router.post("/attendance/bulk", response_model=ApiResponse[BulkMarkResult])
async def bulk_mark(
    bulk: BulkMark,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Mark every staff member, or one department, with the same status."""
    controller = AttendanceController(db)
    return ok(await controller.bulk_mark(principal, bulk))


@router.delete("/attendance", response_model=ApiResponse[AttendanceChange])
async def unmark_attendance(
    key: AttendanceKey,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Remove the record for a staff member and day."""
    controller = AttendanceController(db)
    return ok(await controller.unmark(principal, key))


@router.get("/my-report", response_model=ApiResponse[MyReportResponse])
async def my_report(
    year: int = Query(..., ge=1900, le=2100),
    month: int = Query(..., ge=0, le=11, description="0 = January"),
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """The logged-in employee's month."""
    controller = AttendanceController(db)
    return ok(await controller.my_report(principal, year, month))

"""
Holiday calendar endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.api.v1.middleware import require_authentication
from staff_attendance.controllers.holiday_controller import HolidayController
from staff_attendance.core.access import Principal
from staff_attendance.db.session import get_db
from staff_attendance.schemas.common import ApiResponse, ok
from staff_attendance.schemas.holiday import HolidayCreate, HolidayDeclared, HolidayDelete, HolidayResponse

router = APIRouter()


@router.get("", response_model=ApiResponse[List[HolidayResponse]])
async def list_holidays(
    year: Optional[int] = Query(None, ge=1900, le=2100),
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """List holidays by date."""
    controller = HolidayController(db)
    return ok(await controller.list_holidays(year=year))


@router.post("", response_model=ApiResponse[HolidayDeclared], status_code=status.HTTP_201_CREATED)
async def add_holiday(
    holiday_data: HolidayCreate,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Declare a holiday and mark every current staff member for it."""
    controller = HolidayController(db)
    return ok(await controller.add_holiday(principal, holiday_data), message="Holiday added")


@router.delete("", response_model=ApiResponse)
async def remove_holiday(
    holiday_data: HolidayDelete,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Remove a holiday declaration. Recorded attendance is kept."""
    controller = HolidayController(db)
    await controller.remove_holiday(principal, holiday_data.date)
    return ok(message="Holiday removed")

"""
Holiday controller.
"""

from datetime import date
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.controllers.base_controller import BaseController
from staff_attendance.core.access import Principal
from staff_attendance.schemas.holiday import HolidayCreate, HolidayDeclared, HolidayResponse
from staff_attendance.services.holiday_service import HolidayService


class HolidayController(BaseController):
    """Controller for holiday calendar operations."""

    def __init__(self, session: AsyncSession):
        self.holiday_service = HolidayService(session)

    async def list_holidays(self, year: Optional[int] = None) -> List[HolidayResponse]:
        return await self.holiday_service.list_holidays(year=year)

    async def add_holiday(self, principal: Principal, holiday_data: HolidayCreate) -> HolidayDeclared:
        return await self.holiday_service.add_holiday(principal, holiday_data)

    async def remove_holiday(self, principal: Principal, day: date) -> None:
        await self.holiday_service.remove_holiday(principal, day)

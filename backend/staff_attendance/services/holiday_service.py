"""
Holiday calendar service.
Declaring a holiday marks every current staff member as on holiday for that date.
"""

from datetime import date
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.core.access import Capability, Principal
from staff_attendance.core.exceptions import NotFoundError
from staff_attendance.core.logging import get_logger
from staff_attendance.db.repositories.attendance_repository import AttendanceRepository
from staff_attendance.db.repositories.holiday_repository import HolidayRepository
from staff_attendance.db.repositories.staff_repository import StaffRepository
from staff_attendance.models.attendance import AttendanceStatus
from staff_attendance.schemas.holiday import HolidayCreate, HolidayDeclared, HolidayResponse
from staff_attendance.services.base_service import BaseService

logger = get_logger(__name__)


class HolidayService(BaseService):
    """Service for holiday calendar operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.holiday_repo = HolidayRepository(session)
        self.staff_repo = StaffRepository(session)
        self.attendance_repo = AttendanceRepository(session)

    async def list_holidays(self, year: Optional[int] = None) -> List[HolidayResponse]:
        """List holidays by date ascending."""
        holidays = await self.holiday_repo.list_ordered(year=year)
        return [HolidayResponse.model_validate(h) for h in holidays]

    async def add_holiday(self, principal: Principal, holiday_data: HolidayCreate) -> HolidayDeclared:
        """
        Declare (or rename) a holiday.

        Every staff member that exists now gets a ``holiday`` record for the
        date, replacing any manual mark. Staff added later pick the date up
        through auto-fill when it is next read.

        Args:
            principal: Caller, must be allowed to write holidays
            holiday_data: Date and display name

        Returns:
            The declaration and the number of staff marked
        """
        principal.require(Capability.WRITE_HOLIDAYS)

        await self.holiday_repo.upsert(holiday_data.date, holiday_data.name)
        staff_ids = await self.staff_repo.list_ids()
        marked = await self.attendance_repo.upsert_many(
            (staff_id, holiday_data.date, AttendanceStatus.HOLIDAY) for staff_id in staff_ids
        )
        await self.session.commit()

        logger.info(
            "Holiday declared",
            extra={
                "date": holiday_data.date.isoformat(),
                "holiday_name": holiday_data.name,
                "staff_marked": marked,
                "by": principal.username,
            },
        )
        return HolidayDeclared(date=holiday_data.date, name=holiday_data.name, marked=marked)

    async def remove_holiday(self, principal: Principal, day: date) -> None:
        """
        Remove a holiday declaration. Attendance already recorded as holiday stays.

        Raises:
            NotFoundError: If no holiday is declared for the date
        """
        principal.require(Capability.WRITE_HOLIDAYS)

        if not await self.holiday_repo.delete(day):
            raise NotFoundError(f"No holiday declared for {day.isoformat()}")
        await self.session.commit()
        logger.info("Holiday removed", extra={"date": day.isoformat(), "by": principal.username})

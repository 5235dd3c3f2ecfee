"""
Attendance service.

Reads materialise holiday and weekend rows before returning: every staff
member without a record on a holiday gets ``holiday``, on a weekend day gets
``weekend``. Materialisation is an insert-or-ignore inside the request
transaction, so repeated or concurrent reads never create a second row.
"""

from datetime import date
from typing import Dict, Iterable, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.core.access import Capability, Principal
from staff_attendance.core.config import settings
from staff_attendance.core.exceptions import NotFoundError, ReferentialError
from staff_attendance.core.logging import get_logger
from staff_attendance.db.repositories.attendance_repository import AttendanceRepository
from staff_attendance.db.repositories.holiday_repository import HolidayRepository
from staff_attendance.db.repositories.staff_repository import StaffRepository
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
from staff_attendance.services.base_service import BaseService
from staff_attendance.services.status_resolver import (
    calendar_status,
    is_weekend,
    resolve_status,
    status_to_store,
)
from staff_attendance.utils.dates import iter_days, month_bounds

logger = get_logger(__name__)


class AttendanceService(BaseService):
    """Service for the attendance ledger."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.attendance_repo = AttendanceRepository(session)
        self.staff_repo = StaffRepository(session)
        self.holiday_repo = HolidayRepository(session)

    async def materialize_day(self, day: date, staff_ids: Optional[Iterable[str]] = None) -> int:
        """
        Fill in the calendar status of one day for staff without a record.

        Args:
            day: Date being read
            staff_ids: Staff to consider, defaults to the whole roster

        Returns:
            Number of rows inserted (0 on a working day or a second read)
        """
        fill = calendar_status(await self.holiday_repo.is_holiday(day), is_weekend(day))
        if fill is None:
            return 0

        if staff_ids is None:
            staff_ids = await self.staff_repo.list_ids()
        inserted = await self.attendance_repo.insert_missing(
            (staff_id, day, fill) for staff_id in staff_ids
        )
        if inserted:
            logger.info(
                "Auto-filled attendance",
                extra={"date": day.isoformat(), "status": fill.value, "rows": inserted},
            )
        return inserted

    async def materialize_range(self, start: date, end: date) -> int:
        """Fill in every holiday and weekend day in [start, end]."""
        holidays = await self.holiday_repo.map_between(start, end)
        staff_ids = await self.staff_repo.list_ids()

        rows = []
        for day in iter_days(start, end):
            fill = calendar_status(day in holidays, is_weekend(day))
            if fill is not None:
                rows.extend((staff_id, day, fill) for staff_id in staff_ids)

        inserted = await self.attendance_repo.insert_missing(rows)
        if inserted:
            logger.info(
                "Auto-filled attendance range",
                extra={"start": start.isoformat(), "end": end.isoformat(), "rows": inserted},
            )
        return inserted

    async def get_day(self, principal: Principal, day: date) -> DayAttendance:
        """Return {staff_id: status} for one day, after auto-fill."""
        await self.materialize_day(day)
        await self.session.commit()

        records = await self.attendance_repo.get_by_date(day)
        return principal.visible_map(records)

    async def get_month(self, principal: Principal, year: int, month: int) -> MonthAttendance:
        """
        Return {"YYYY-MM-DD": {staff_id: status}} for a month, after auto-fill.

        Args:
            principal: Caller; employees only see their own rows
            year: Four-digit year
            month: Zero-based month (0 = January)
        """
        start, end = month_bounds(year, month)
        await self.materialize_range(start, end)
        await self.session.commit()

        if principal.sees_everyone:
            rows = await self.attendance_repo.get_by_range(start, end)
        elif principal.staff_id is not None:
            rows = await self.attendance_repo.get_by_range(start, end, staff_id=principal.staff_id)
        else:
            rows = []

        result: MonthAttendance = {}
        for staff_id, day, status in rows:
            result.setdefault(day.isoformat(), {})[staff_id] = status
        return result

    async def _stored_status(self, mark: AttendanceMark):
        if not await self.staff_repo.exists(mark.staff_id):
            raise ReferentialError(f"Staff '{mark.staff_id}' not found", details={"staffId": mark.staff_id})
        holiday = await self.holiday_repo.is_holiday(mark.date)
        return status_to_store(
            mark.status,
            holiday=holiday,
            weekend=is_weekend(mark.date),
            enforce_calendar=settings.ENFORCE_CALENDAR_OVERRIDE,
        )

    async def set_status(
        self,
        principal: Principal,
        mark: AttendanceMark,
        toggle: bool = False,
    ) -> AttendanceChange:
        """
        Record a status for one staff member on one day.

        On holidays and weekend days the stored status is forced to
        holiday/weekend when ENFORCE_CALENDAR_OVERRIDE is on. With ``toggle``,
        submitting the status that is already recorded removes the record.

        Raises:
            RoleError: If the caller may not write attendance
            ReferentialError: If the staff id is unknown
        """
        principal.require(Capability.WRITE_ATTENDANCE)

        stored = await self._stored_status(mark)
        current = await self.attendance_repo.get_status(mark.staff_id, mark.date)

        if toggle and current == mark.status:
            await self.attendance_repo.delete_record(mark.staff_id, mark.date)
            action, status = "deleted", None
        else:
            await self.attendance_repo.upsert(mark.staff_id, mark.date, stored)
            if current is None:
                action = "created"
            elif current == stored:
                action = "unchanged"
            else:
                action = "updated"
            status = stored
        await self.session.commit()

        logger.info(
            "Attendance %s",
            action,
            extra={
                "staff_id": mark.staff_id,
                "date": mark.date.isoformat(),
                "requested": mark.status.value,
                "stored": status.value if status else None,
                "by": principal.username,
            },
        )
        return AttendanceChange(staff_id=mark.staff_id, date=mark.date, status=status, action=action)

    async def bulk_mark(self, principal: Principal, bulk: BulkMark) -> BulkMarkResult:
        """Mark every staff member (or one department) with the same status."""
        principal.require(Capability.WRITE_ATTENDANCE)

        staff = await self.staff_repo.list_all(department=bulk.department)
        stored = status_to_store(
            bulk.status,
            holiday=await self.holiday_repo.is_holiday(bulk.date),
            weekend=is_weekend(bulk.date),
            enforce_calendar=settings.ENFORCE_CALENDAR_OVERRIDE,
        )
        marked = await self.attendance_repo.upsert_many((s.id, bulk.date, stored) for s in staff)
        await self.session.commit()

        logger.info(
            "Bulk attendance marked",
            extra={
                "date": bulk.date.isoformat(),
                "status": stored.value,
                "department": bulk.department,
                "rows": marked,
                "by": principal.username,
            },
        )
        return BulkMarkResult(date=bulk.date, status=stored, marked=marked)

    async def unmark(self, principal: Principal, key: AttendanceKey) -> AttendanceChange:
        """Remove the record for a pair; a missing record is not an error."""
        principal.require(Capability.WRITE_ATTENDANCE)

        removed = await self.attendance_repo.delete_record(key.staff_id, key.date)
        await self.session.commit()
        return AttendanceChange(
            staff_id=key.staff_id,
            date=key.date,
            status=None,
            action="deleted" if removed else "unchanged",
        )

    async def my_report(self, principal: Principal, year: int, month: int) -> MyReportResponse:
        """The caller's own effective status for every day of a month."""
        principal.require(Capability.VIEW_OWN_REPORT)
        if principal.staff_id is None:
            raise NotFoundError("No staff record is linked to this account")

        start, end = month_bounds(year, month)
        await self.materialize_range(start, end)
        await self.session.commit()

        recorded = {
            day: status
            for _, day, status in await self.attendance_repo.get_by_range(
                start, end, staff_id=principal.staff_id
            )
        }
        holidays = await self.holiday_repo.map_between(start, end)
        days = {
            day.isoformat(): resolve_status(recorded.get(day), day in holidays, is_weekend(day))
            for day in iter_days(start, end)
        }
        return MyReportResponse(staff_id=principal.staff_id, year=year, month=month, days=days)

"""
Reporting aggregator.

Each view tallies effective statuses (record > holiday > weekend > unmarked)
and computes round(100 * (present + halfday / 2) / denominator). The
denominator is fixed per view:

* dashboard: staff whose status that day is neither holiday nor weekend
* monthly report: days in the month minus that staff member's holiday and weekend days
* overview: every calendar day in the range
"""

from datetime import date
from typing import Dict, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.core.access import Principal
from staff_attendance.core.exceptions import ValidationError
from staff_attendance.db.repositories.attendance_repository import AttendanceRepository
from staff_attendance.db.repositories.holiday_repository import HolidayRepository
from staff_attendance.db.repositories.staff_repository import StaffRepository
from staff_attendance.models.attendance import AttendanceStatus
from staff_attendance.models.staff import Staff
from staff_attendance.schemas.report import (
    DashboardReport,
    DashboardStaffRow,
    MonthlyReport,
    MonthlyStaffRow,
    OverviewReport,
    OverviewRow,
    StatusCounts,
)
from staff_attendance.services.base_service import BaseService
from staff_attendance.services.status_resolver import attendance_percent, is_weekend, resolve_status
from staff_attendance.utils.dates import days_between, iter_days, month_bounds

# Longest range the overview accepts.
MAX_OVERVIEW_DAYS = 366

_NON_WORKING = (AttendanceStatus.HOLIDAY, AttendanceStatus.WEEKEND)


def aggregate(
    staff: List[Staff],
    days: List[date],
    recorded: Dict[Tuple[str, date], AttendanceStatus],
    holidays: Dict[date, str],
) -> Dict[str, Tuple[List[Optional[AttendanceStatus]], StatusCounts]]:
    """
    Resolve and count the effective status of every staff member on every day.

    Args:
        staff: Staff to report on
        days: Dates in order
        recorded: Ledger rows keyed by (staff_id, date)
        holidays: Declared holidays in range

    Returns:
        {staff_id: (statuses in day order, counts)}
    """
    weekend = {day: is_weekend(day) for day in days}
    result = {}
    for member in staff:
        counts = StatusCounts()
        statuses = []
        for day in days:
            status = resolve_status(recorded.get((member.id, day)), day in holidays, weekend[day])
            counts.add(status)
            statuses.append(status)
        result[member.id] = (statuses, counts)
    return result


def overview_sort_key(row: OverviewRow):
    """Most present first, then fewest absent; name and id keep the order stable."""
    return (-row.counts.present, row.counts.absent, row.name.lower(), row.staff_id)


class ReportService(BaseService):
    """Service computing attendance reports."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.staff_repo = StaffRepository(session)
        self.holiday_repo = HolidayRepository(session)
        self.attendance_repo = AttendanceRepository(session)

    async def _visible_staff(self, principal: Principal, department: Optional[str] = None) -> List[Staff]:
        staff = await self.staff_repo.list_all(department=department)
        return principal.visible(staff)

    async def _recorded(self, principal: Principal, start: date, end: date) -> Dict[Tuple[str, date], AttendanceStatus]:
        staff_filter = None if principal.sees_everyone else principal.staff_id
        if not principal.sees_everyone and staff_filter is None:
            return {}
        rows = await self.attendance_repo.get_by_range(start, end, staff_id=staff_filter)
        return {(staff_id, day): status for staff_id, day, status in rows}

    async def dashboard(self, principal: Principal, day: date) -> DashboardReport:
        """Counts for one day; the percentage covers staff expected at work."""
        staff = await self._visible_staff(principal)
        recorded = await self._recorded(principal, day, day)
        holidays = await self.holiday_repo.map_between(day, day)

        per_staff = aggregate(staff, [day], recorded, holidays)
        counts = StatusCounts()
        rows = []
        for member in staff:
            status = per_staff[member.id][0][0]
            counts.add(status)
            rows.append(DashboardStaffRow(
                staff_id=member.id,
                name=member.name,
                department=member.department,
                status=status,
            ))

        working = len(staff) - counts.holiday - counts.weekend
        return DashboardReport(
            date=day,
            holiday=holidays.get(day),
            total_staff=len(staff),
            working_staff=working,
            counts=counts,
            percent=attendance_percent(counts.present, counts.halfday, working),
            staff=rows,
        )

    async def monthly(
        self,
        principal: Principal,
        year: int,
        month: int,
        department: Optional[str] = None,
    ) -> MonthlyReport:
        """
        Day grid for a month.

        Args:
            principal: Caller; employees get only their own row
            year: Four-digit year
            month: Zero-based month (0 = January)
            department: Optional department filter

        Returns:
            MonthlyReport with one row per staff member and column totals
        """
        start, end = month_bounds(year, month)
        days = list(iter_days(start, end))
        staff = await self._visible_staff(principal, department)
        recorded = await self._recorded(principal, start, end)
        holidays = await self.holiday_repo.map_between(start, end)

        per_staff = aggregate(staff, days, recorded, holidays)
        totals = StatusCounts()
        rows = []
        for member in staff:
            statuses, counts = per_staff[member.id]
            for status in statuses:
                totals.add(status)
            working_days = len(days) - counts.holiday - counts.weekend
            rows.append(MonthlyStaffRow(
                staff_id=member.id,
                name=member.name,
                department=member.department,
                position=member.position,
                days=statuses,
                counts=counts,
                working_days=working_days,
                percent=attendance_percent(counts.present, counts.halfday, working_days),
            ))

        return MonthlyReport(
            year=year,
            month=month,
            days_in_month=len(days),
            department=department,
            holidays=[day.isoformat() for day in holidays],
            rows=rows,
            totals=totals,
        )

    async def overview(self, principal: Principal, start: date, end: date) -> OverviewReport:
        """
        Ranked summary over [start, end]; the percentage is over every calendar day.

        Raises:
            ValidationError: If the range is inverted or too long
        """
        if end < start:
            raise ValidationError("'from' must not be after 'to'")
        total_days = days_between(start, end)
        if total_days > MAX_OVERVIEW_DAYS:
            raise ValidationError(f"Range may not exceed {MAX_OVERVIEW_DAYS} days")

        days = list(iter_days(start, end))
        staff = await self._visible_staff(principal)
        recorded = await self._recorded(principal, start, end)
        holidays = await self.holiday_repo.map_between(start, end)

        per_staff = aggregate(staff, days, recorded, holidays)
        rows = [
            OverviewRow(
                rank=0,
                staff_id=member.id,
                name=member.name,
                department=member.department,
                counts=per_staff[member.id][1],
                total_days=total_days,
                percent=attendance_percent(
                    per_staff[member.id][1].present,
                    per_staff[member.id][1].halfday,
                    total_days,
                ),
            )
            for member in staff
        ]
        rows.sort(key=overview_sort_key)
        for position, row in enumerate(rows, start=1):
            row.rank = position

        return OverviewReport(start=start, end=end, total_days=total_days, rows=rows)

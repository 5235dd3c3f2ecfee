"""
Holiday repository for database operations.
"""

from datetime import date
from typing import Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, extract

from staff_attendance.db.repositories.base_repository import BaseRepository
from staff_attendance.models.holiday import Holiday


class HolidayRepository(BaseRepository[Holiday]):
    """Repository for holiday calendar operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Holiday, session)

    async def upsert(self, day: date, name: str) -> None:
        """
        Declare a holiday, replacing the name when the date already exists.

        Args:
            day: Holiday date
            name: Display name
        """
        stmt = self.upsert_insert().values(date=day, name=name)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Holiday.date],
            set_={"name": stmt.excluded.name},
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def is_holiday(self, day: date) -> bool:
        return await self.exists(day)

    async def list_ordered(self, year: Optional[int] = None) -> List[Holiday]:
        """List holidays by date ascending."""
        query = select(Holiday).order_by(Holiday.date.asc())
        if year:
            query = query.where(extract("year", Holiday.date) == year)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def map_between(self, start: date, end: date) -> Dict[date, str]:
        """Return {date: name} for holidays within [start, end]."""
        result = await self.session.execute(
            select(Holiday.date, Holiday.name)
            .where(Holiday.date >= start, Holiday.date <= end)
            .order_by(Holiday.date.asc())
        )
        return {row.date: row.name for row in result}

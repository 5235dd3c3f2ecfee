"""
Staff repository for database operations.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from staff_attendance.db.repositories.base_repository import BaseRepository
from staff_attendance.models.staff import Staff


class StaffRepository(BaseRepository[Staff]):
    """Repository for staff operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Staff, session)

    async def list_all(self, department: Optional[str] = None) -> List[Staff]:
        """List staff ordered by name, optionally limited to one department."""
        query = select(Staff).order_by(Staff.name.asc(), Staff.id.asc())
        if department:
            query = query.where(Staff.department == department)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_ids(self) -> List[str]:
        """List every staff id."""
        result = await self.session.execute(select(Staff.id).order_by(Staff.id))
        return list(result.scalars().all())

    async def list_departments(self) -> List[str]:
        """Distinct, non-empty department names in ascending order."""
        result = await self.session.execute(
            select(Staff.department).distinct()
            .where(Staff.department != "")
            .order_by(Staff.department.asc())
        )
        return list(result.scalars().all())

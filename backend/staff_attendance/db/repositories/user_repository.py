"""
User (login account) repository for database operations.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from staff_attendance.db.repositories.base_repository import BaseRepository
from staff_attendance.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for login accounts."""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def get_by_staff_id(self, staff_id: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.staff_id == staff_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[User]:
        result = await self.session.execute(select(User).order_by(User.username.asc()))
        return list(result.scalars().all())

    async def set_password_hash(self, user_id: int, password_hash: str) -> None:
        await self.session.execute(
            update(User).where(User.id == user_id).values(password_hash=password_hash)
        )
        await self.session.flush()

    async def delete_by_staff_id(self, staff_id: str) -> int:
        """Delete the login linked to a staff record. Returns rows removed."""
        result = await self.session.execute(
            delete(User).where(User.staff_id == staff_id)
        )
        await self.session.flush()
        return result.rowcount

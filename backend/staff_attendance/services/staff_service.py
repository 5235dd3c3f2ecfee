"""
Staff service with business logic.
Creating a staff member also creates its employee login; deleting one removes both.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from staff_attendance.core.access import Capability, Principal
from staff_attendance.core.config import settings
from staff_attendance.core.exceptions import ConflictError, NotFoundError, RoleError
from staff_attendance.core.logging import get_logger
from staff_attendance.core.security import hash_password
from staff_attendance.db.repositories.attendance_repository import AttendanceRepository
from staff_attendance.db.repositories.staff_repository import StaffRepository
from staff_attendance.db.repositories.user_repository import UserRepository
from staff_attendance.models.user import UserRole
from staff_attendance.schemas.staff import StaffCreate, StaffResponse, StaffUpdate
from staff_attendance.services.base_service import BaseService

logger = get_logger(__name__)


def login_name_for(staff_id: str) -> str:
    """Username of the login created alongside a staff record."""
    return staff_id.strip().lower()


class StaffService(BaseService):
    """Service for roster operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.staff_repo = StaffRepository(session)
        self.user_repo = UserRepository(session)
        self.attendance_repo = AttendanceRepository(session)

    async def list_staff(
        self,
        principal: Principal,
        department: Optional[str] = None,
    ) -> List[StaffResponse]:
        """List the staff the caller may see, ordered by name."""
        staff = await self.staff_repo.list_all(department=department)
        return [StaffResponse.model_validate(s) for s in principal.visible(staff)]

    async def get_staff(self, principal: Principal, staff_id: str) -> StaffResponse:
        if not principal.can_see(staff_id):
            raise RoleError("Employees may only view their own record")
        staff = await self.staff_repo.get(staff_id)
        if not staff:
            raise NotFoundError(f"Staff '{staff_id}' not found")
        return StaffResponse.model_validate(staff)

    async def list_departments(self, principal: Principal) -> List[str]:
        if principal.sees_everyone:
            return await self.staff_repo.list_departments()
        if principal.staff_id is None:
            return []
        own = await self.staff_repo.get(principal.staff_id)
        return [own.department] if own and own.department else []

    async def create_staff(self, principal: Principal, staff_data: StaffCreate) -> StaffResponse:
        """
        Add a staff member and its employee login.

        The login username is the lower-cased staff id and the password is
        DEFAULT_STAFF_PASSWORD until the employee changes it.

        Raises:
            ConflictError: If the staff id or the derived username is taken
        """
        principal.require(Capability.WRITE_STAFF)

        if await self.staff_repo.exists(staff_data.id):
            raise ConflictError(f"Staff ID '{staff_data.id}' already exists")
        username = login_name_for(staff_data.id)
        if await self.user_repo.get_by_username(username):
            raise ConflictError(f"Username '{username}' already exists")

        try:
            staff = await self.staff_repo.create(
                id=staff_data.id,
                name=staff_data.name,
                department=staff_data.department,
                position=staff_data.position,
            )
            await self.user_repo.create(
                username=username,
                password_hash=hash_password(settings.DEFAULT_STAFF_PASSWORD),
                role=UserRole.EMPLOYEE,
                staff_id=staff.id,
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(f"Staff ID '{staff_data.id}' already exists") from e

        logger.info(
            "Staff created",
            extra={"staff_id": staff.id, "username": username, "by": principal.username},
        )
        return StaffResponse.model_validate(staff)

    async def update_staff(
        self,
        principal: Principal,
        staff_id: str,
        staff_data: StaffUpdate,
    ) -> StaffResponse:
        principal.require(Capability.WRITE_STAFF)

        staff = await self.staff_repo.update(
            staff_id,
            name=staff_data.name,
            department=staff_data.department,
            position=staff_data.position,
        )
        if not staff:
            raise NotFoundError(f"Staff '{staff_id}' not found")
        await self.session.commit()
        logger.info("Staff updated", extra={"staff_id": staff_id, "by": principal.username})
        return StaffResponse.model_validate(staff)

    async def delete_staff(self, principal: Principal, staff_id: str) -> None:
        """
        Delete a staff member with all of its attendance and its login, in one transaction.

        Raises:
            NotFoundError: If the staff id is unknown
        """
        principal.require(Capability.WRITE_STAFF)

        if not await self.staff_repo.exists(staff_id):
            raise NotFoundError(f"Staff '{staff_id}' not found")

        records = await self.attendance_repo.delete_for_staff(staff_id)
        logins = await self.user_repo.delete_by_staff_id(staff_id)
        await self.staff_repo.delete(staff_id)
        await self.session.commit()

        logger.info(
            "Staff deleted",
            extra={
                "staff_id": staff_id,
                "attendance_removed": records,
                "logins_removed": logins,
                "by": principal.username,
            },
        )

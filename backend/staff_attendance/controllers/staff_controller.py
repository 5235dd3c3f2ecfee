"""
Staff controller.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.controllers.base_controller import BaseController
from staff_attendance.core.access import Principal
from staff_attendance.schemas.staff import StaffCreate, StaffResponse, StaffUpdate
from staff_attendance.services.staff_service import StaffService


class StaffController(BaseController):
    """Controller for roster operations."""

    def __init__(self, session: AsyncSession):
        self.staff_service = StaffService(session)

    async def list_staff(self, principal: Principal, department: Optional[str] = None) -> List[StaffResponse]:
        return await self.staff_service.list_staff(principal, department=department)

    async def get_staff(self, principal: Principal, staff_id: str) -> StaffResponse:
        return await self.staff_service.get_staff(principal, staff_id)

    async def list_departments(self, principal: Principal) -> List[str]:
        return await self.staff_service.list_departments(principal)

    async def create_staff(self, principal: Principal, staff_data: StaffCreate) -> StaffResponse:
        return await self.staff_service.create_staff(principal, staff_data)

    async def update_staff(self, principal: Principal, staff_id: str, staff_data: StaffUpdate) -> StaffResponse:
        return await self.staff_service.update_staff(principal, staff_id, staff_data)

    async def delete_staff(self, principal: Principal, staff_id: str) -> None:
        await self.staff_service.delete_staff(principal, staff_id)

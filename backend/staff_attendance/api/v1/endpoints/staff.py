"""
Staff roster endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.api.v1.middleware import require_authentication
from staff_attendance.controllers.staff_controller import StaffController
from staff_attendance.core.access import Principal
from staff_attendance.db.session import get_db
from staff_attendance.schemas.common import ApiResponse, ok
from staff_attendance.schemas.staff import StaffCreate, StaffResponse, StaffUpdate

router = APIRouter()


@router.get("", response_model=ApiResponse[List[StaffResponse]])
async def list_staff(
    dept: Optional[str] = Query(None, description="Only this department"),
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """List staff. Employees only get their own record."""
    controller = StaffController(db)
    return ok(await controller.list_staff(principal, department=dept))


@router.get("/departments", response_model=ApiResponse[List[str]])
async def list_departments(
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    controller = StaffController(db)
    return ok(await controller.list_departments(principal))


@router.get("/{staff_id}", response_model=ApiResponse[StaffResponse])
async def get_staff(
    staff_id: str,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    controller = StaffController(db)
    return ok(await controller.get_staff(principal, staff_id))


@router.post("", response_model=ApiResponse[StaffResponse], status_code=status.HTTP_201_CREATED)
async def create_staff(
    staff_data: StaffCreate,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Add a staff member and its employee login."""
    controller = StaffController(db)
    return ok(await controller.create_staff(principal, staff_data), message="Staff added")


@router.put("/{staff_id}", response_model=ApiResponse[StaffResponse])
async def update_staff(
    staff_id: str,
    staff_data: StaffUpdate,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    controller = StaffController(db)
    return ok(await controller.update_staff(principal, staff_id, staff_data), message="Staff updated")


@router.delete("/{staff_id}", response_model=ApiResponse)
async def delete_staff(
    staff_id: str,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Delete a staff member, its attendance and its login."""
    controller = StaffController(db)
    await controller.delete_staff(principal, staff_id)
    return ok(message="Staff deleted")

"""
Admin endpoints for login account management.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.api.v1.middleware import require_authentication
from staff_attendance.controllers.auth_controller import AuthController
from staff_attendance.core.access import Principal
from staff_attendance.db.session import get_db
from staff_attendance.schemas.common import ApiResponse, ok
from staff_attendance.schemas.user import PasswordReset, UserCreate, UserResponse

router = APIRouter()


@router.post("/reset-user-password", response_model=ApiResponse[UserResponse])
async def reset_user_password(
    data: PasswordReset,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Reset another account to the default staff password."""
    controller = AuthController(db)
    return ok(await controller.reset_password(principal, data), message="Password reset to default")


@router.get("/users", response_model=ApiResponse[List[UserResponse]])
async def list_users(
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """List login accounts."""
    controller = AuthController(db)
    return ok(await controller.list_users(principal))


@router.post("/users", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Create a login account, e.g. for a manager."""
    controller = AuthController(db)
    return ok(await controller.create_user(principal, data))

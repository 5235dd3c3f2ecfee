"""
Authentication endpoints: login, logout, current user and password change.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from staff_attendance.api.v1.middleware import require_authentication
from staff_attendance.controllers.auth_controller import AuthController
from staff_attendance.core.access import Principal
from staff_attendance.core.config import settings
from staff_attendance.core.rate_limit import limiter
from staff_attendance.db.session import get_db
from staff_attendance.schemas.common import ApiResponse, ok
from staff_attendance.schemas.user import LoginRequest, PasswordChange, SessionUser

router = APIRouter()


@router.post("/login", response_model=ApiResponse[SessionUser])
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Check credentials and start a session."""
    controller = AuthController(db)
    return ok(await controller.login(request, credentials))


@router.post("/logout", response_model=ApiResponse)
async def logout(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """End the session. Safe to call when not logged in."""
    AuthController(db).logout(request)
    return ok(message="Logged out")


@router.get("/me", response_model=ApiResponse[SessionUser])
async def me(
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Current session user."""
    return ok(AuthController(db).me(principal))


@router.post("/reset-password", response_model=ApiResponse)
async def change_password(
    data: PasswordChange,
    principal: Principal = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
):
    """Change the caller's own password."""
    controller = AuthController(db)
    await controller.change_password(principal, data)
    return ok(message="Password updated")

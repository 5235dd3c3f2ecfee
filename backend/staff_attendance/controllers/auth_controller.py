"""
Authentication controller.
Coordinates the credential check with the session cookie.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from staff_attendance.controllers.base_controller import BaseController
from staff_attendance.core.access import Principal
from staff_attendance.core.security import clear_session, write_session_user
from staff_attendance.schemas.user import (
    LoginRequest,
    PasswordChange,
    PasswordReset,
    SessionUser,
    UserCreate,
    UserResponse,
)
from staff_attendance.services.auth_service import AuthService


class AuthController(BaseController):
    """Controller for login, logout and account management."""

    def __init__(self, session: AsyncSession):
        self.auth_service = AuthService(session)

    async def login(self, request: Request, credentials: LoginRequest) -> SessionUser:
        """Verify credentials and start a fresh session."""
        principal = await self.auth_service.authenticate(credentials.username, credentials.password)
        write_session_user(request, principal.to_session())
        return SessionUser.model_validate(principal.to_session())

    def logout(self, request: Request) -> None:
        clear_session(request)

    def me(self, principal: Principal) -> SessionUser:
        return SessionUser.model_validate(principal.to_session())

    async def change_password(self, principal: Principal, data: PasswordChange) -> None:
        await self.auth_service.change_password(principal, data)

    async def reset_password(self, principal: Principal, data: PasswordReset) -> UserResponse:
        return await self.auth_service.reset_password(principal, data)

    async def list_users(self, principal: Principal) -> List[UserResponse]:
        return await self.auth_service.list_users(principal)

    async def create_user(self, principal: Principal, data: UserCreate) -> UserResponse:
        return await self.auth_service.create_user(principal, data)

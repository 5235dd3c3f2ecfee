"""
Authentication and login account service.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from staff_attendance.core.access import Capability, Principal
from staff_attendance.core.config import settings
from staff_attendance.core.exceptions import AuthError, ConflictError, NotFoundError
from staff_attendance.core.logging import get_logger
from staff_attendance.core.security import hash_password, verify_password
from staff_attendance.db.repositories.staff_repository import StaffRepository
from staff_attendance.db.repositories.user_repository import UserRepository
from staff_attendance.models.user import User
from staff_attendance.schemas.user import PasswordChange, PasswordReset, UserCreate, UserResponse
from staff_attendance.services.base_service import BaseService

logger = get_logger(__name__)


def principal_for(user: User) -> Principal:
    return Principal(
        user_id=user.id,
        username=user.username,
        role=user.role,
        staff_id=user.staff_id,
    )


class AuthService(BaseService):
    """Service for logins and account management."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.staff_repo = StaffRepository(session)

    async def authenticate(self, username: str, password: str) -> Principal:
        """
        Check credentials.

        Raises:
            AuthError: On unknown username or wrong password
        """
        user = await self.user_repo.get_by_username(username.strip())
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Login failed", extra={"username": username})
            raise AuthError("Invalid username or password")

        logger.info("Login succeeded", extra={"username": user.username, "role": user.role.value})
        return principal_for(user)

    async def resolve_principal(self, user_id: int) -> Optional[Principal]:
        """Reload the session user; None when the account no longer exists."""
        user = await self.user_repo.get(user_id)
        return principal_for(user) if user else None

    async def change_password(self, principal: Principal, data: PasswordChange) -> None:
        user = await self.user_repo.get(principal.user_id)
        if not user:
            raise AuthError("Not authenticated")
        if not verify_password(data.current_password, user.password_hash):
            raise AuthError("Current password incorrect")

        await self.user_repo.set_password_hash(user.id, hash_password(data.new_password))
        await self.session.commit()
        logger.info("Password changed", extra={"username": user.username})

    async def reset_password(self, principal: Principal, data: PasswordReset) -> UserResponse:
        """Reset another account to DEFAULT_STAFF_PASSWORD."""
        principal.require(Capability.MANAGE_USERS)

        if data.user_id is not None:
            user = await self.user_repo.get(data.user_id)
        else:
            user = await self.user_repo.get_by_staff_id(data.staff_id)
        if not user:
            raise NotFoundError("User not found")

        await self.user_repo.set_password_hash(user.id, hash_password(settings.DEFAULT_STAFF_PASSWORD))
        await self.session.commit()
        logger.info("Password reset", extra={"username": user.username, "by": principal.username})
        return UserResponse.model_validate(user)

    async def list_users(self, principal: Principal) -> List[UserResponse]:
        principal.require(Capability.MANAGE_USERS)
        return [UserResponse.model_validate(u) for u in await self.user_repo.list_all()]

    async def create_user(self, principal: Principal, data: UserCreate) -> UserResponse:
        """
        Create a login account (typically a manager).

        Raises:
            ConflictError: If the username is taken or the staff member already has a login
            NotFoundError: If staffId does not exist
        """
        principal.require(Capability.MANAGE_USERS)

        username = data.username.strip()
        if await self.user_repo.get_by_username(username):
            raise ConflictError(f"Username '{username}' already exists")
        if data.staff_id:
            if not await self.staff_repo.exists(data.staff_id):
                raise NotFoundError(f"Staff '{data.staff_id}' not found")
            if await self.user_repo.get_by_staff_id(data.staff_id):
                raise ConflictError(f"Staff '{data.staff_id}' already has a login")

        try:
            user = await self.user_repo.create(
                username=username,
                password_hash=hash_password(data.password),
                role=data.role,
                staff_id=data.staff_id or None,
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(f"Username '{username}' already exists") from e

        logger.info(
            "User created",
            extra={"username": username, "role": data.role.value, "by": principal.username},
        )
        return UserResponse.model_validate(user)

"""
Login account and session Pydantic schemas.
"""

from typing import Optional

from pydantic import Field, model_validator

from staff_attendance.models.user import UserRole
from staff_attendance.schemas.common import CamelModel


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class SessionUser(CamelModel):
    """The user stored in the session cookie and returned by /me."""
    id: int
    username: str
    role: UserRole
    staff_id: Optional[str] = None


class PasswordChange(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


class PasswordReset(CamelModel):
    """Admin reset of another account to the default password, by user id or staff id."""
    user_id: Optional[int] = None
    staff_id: Optional[str] = None

    @model_validator(mode="after")
    def require_target(self) -> "PasswordReset":
        if self.user_id is None and not self.staff_id:
            raise ValueError("userId or staffId is required")
        return self


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole
    staff_id: Optional[str] = Field(None, max_length=50)

    @model_validator(mode="after")
    def employee_needs_staff(self) -> "UserCreate":
        if self.role == UserRole.EMPLOYEE and not self.staff_id:
            raise ValueError("staffId is required for employee accounts")
        return self


class UserResponse(CamelModel):
    id: int
    username: str
    role: UserRole
    staff_id: Optional[str] = None

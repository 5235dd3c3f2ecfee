"""
Login account model. Employee accounts are linked to exactly one staff record.
"""

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, func, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from staff_attendance.db.base import Base


class UserRole(str, enum.Enum):
    """User role enumeration."""
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class User(Base):
    """Login account."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        SQLEnum(
            UserRole,
            name="user_role",
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=UserRole.EMPLOYEE,
    )
    staff_id = Column(String(50), ForeignKey("staff.id", ondelete="CASCADE"), nullable=True, unique=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    staff = relationship("Staff", back_populates="user")

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"

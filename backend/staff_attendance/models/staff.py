"""
Staff model: the roster of people whose attendance is tracked.
"""

from sqlalchemy import Column, String, DateTime, func
from sqlalchemy.orm import relationship

from staff_attendance.db.base import Base


class Staff(Base):
    """A staff member, keyed by an external-facing identifier such as EMP001."""

    __tablename__ = "staff"

    id = Column(String(50), primary_key=True)
    name = Column(String(200), nullable=False)
    department = Column(String(100), nullable=False, default="", server_default="")
    position = Column(String(100), nullable=False, default="", server_default="")
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    # Relationships
    attendance_records = relationship(
        "AttendanceRecord",
        back_populates="staff",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    user = relationship("User", back_populates="staff", uselist=False, passive_deletes=True)

    def __repr__(self):
        return f"<Staff {self.id} {self.name!r}>"

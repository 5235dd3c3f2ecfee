"""
Attendance ledger model: at most one status per staff member per day.
"""

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, UniqueConstraint, func, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from staff_attendance.db.base import Base


class AttendanceStatus(str, enum.Enum):
    """Attendance status enumeration."""
    PRESENT = "present"
    ABSENT = "absent"
    HALFDAY = "halfday"
    HOLIDAY = "holiday"
    WEEKEND = "weekend"


class AttendanceRecord(Base):
    """Explicit or auto-filled status for one (staff, date) pair."""

    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("staff_id", "date", name="uq_attendance_staff_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(String(50), ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(
        SQLEnum(
            AttendanceStatus,
            name="attendance_status",
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    staff = relationship("Staff", back_populates="attendance_records")

    def __repr__(self):
        return f"<AttendanceRecord {self.staff_id} {self.date} {self.status}>"

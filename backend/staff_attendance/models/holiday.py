"""
Holiday model: named dates that are non-working for all staff.
"""

from sqlalchemy import Column, Date, String

from staff_attendance.db.base import Base


class Holiday(Base):
    """One declared holiday per calendar date."""

    __tablename__ = "holidays"

    date = Column(Date, primary_key=True)
    name = Column(String(255), nullable=False, default="", server_default="")

    def __repr__(self):
        return f"<Holiday {self.date} {self.name!r}>"

"""
Holiday Pydantic schemas.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HolidayCreate(BaseModel):
    """Schema for declaring a holiday."""
    date: date
    name: str = Field("", max_length=200)

    @field_validator("name", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value


class HolidayDelete(BaseModel):
    """Schema for removing a holiday declaration."""
    date: date


class HolidayResponse(BaseModel):
    """Schema for holiday response."""
    model_config = ConfigDict(from_attributes=True)

    date: date
    name: str


class HolidayDeclared(HolidayResponse):
    """A newly declared holiday and how many staff were marked for it."""
    marked: int = 0

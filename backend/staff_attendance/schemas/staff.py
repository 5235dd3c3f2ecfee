"""
Staff Pydantic schemas for request/response validation.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class StaffBase(BaseModel):
    """Base staff schema with common fields."""
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    department: str = Field(
        "",
        max_length=100,
        validation_alias=AliasChoices("dept", "department"),
        serialization_alias="dept",
    )
    position: str = Field("", max_length=100)

    @field_validator("department", "position", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value


class StaffCreate(StaffBase):
    """Schema for creating a staff member."""
    id: str = Field(..., min_length=1, max_length=50)


class StaffUpdate(StaffBase):
    """Schema for updating a staff member. The id is taken from the path."""
    pass


class StaffResponse(StaffBase):
    """Schema for staff response."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str

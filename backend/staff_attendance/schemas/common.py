"""
Shared response envelope and base schema.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Schema whose JSON keys are camelCase (staffId, workingDays, ...)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope used by every JSON endpoint."""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


def ok(data=None, message: Optional[str] = None) -> dict:
    """Build a success body."""
    body = {"success": True, "data": data}
    if message is not None:
        body["message"] = message
    return body

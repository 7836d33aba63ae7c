"""
Schema base classes shared by every request and response model.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
]


class BaseSchema(BaseModel):
    """
    Common configuration: responses load straight from ORM objects and
    request strings arrive stripped.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        # Keep enums as Enum instances; JSON output still uses their values
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class BaseCreateSchema(BaseSchema):
    pass


class BaseUpdateSchema(BaseSchema):
    """
    Partial update. Fields are Optional and services apply only
    ``model_fields_set``, so an omitted field is left untouched.
    """


class BaseResponseSchema(BaseSchema):
    """A persisted row: id plus the timestamps from ``TimestampModel``."""

    id: str = Field(..., description="Unique identifier")
    created_at: datetime
    updated_at: datetime

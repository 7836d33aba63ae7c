"""
Report (dispute) schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from hostelhub.models.base.enums import ReportStatus
from hostelhub.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = ["ReportCreate", "ReportResolve", "ReportResponse"]


class ReportCreate(BaseCreateSchema):
    hostel_id: str = Field(..., min_length=1)
    booking_id: Optional[str] = None
    reason: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)


class ReportResolve(BaseSchema):
    status: ReportStatus
    admin_note: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: ReportStatus) -> ReportStatus:
        if v not in (ReportStatus.RESOLVED, ReportStatus.DISMISSED):
            raise ValueError("Status must be RESOLVED or DISMISSED")
        return v


class ReportResponse(BaseResponseSchema):
    student_id: str
    manager_id: str
    hostel_id: str
    booking_id: Optional[str] = None
    reason: str
    description: str
    status: ReportStatus
    admin_note: Optional[str] = None
    resolved_by: Optional[str] = None
    resolved_at: Optional[datetime] = None

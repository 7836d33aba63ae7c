"""
Monthly platform fee schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, HttpUrl, field_validator

from hostelhub.models.base.enums import FeeStatus
from hostelhub.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema
from hostelhub.utils.datetime_utils import DateRangeCalculator

__all__ = ["FeeSubmit", "FeeReview", "FeeHostelBrief", "FeeResponse", "PendingFeeSummary"]


class FeeSubmit(BaseCreateSchema):
    hostel_id: str = Field(..., min_length=1)
    month: str = Field(..., description="Fee month, YYYY-MM")
    payment_proof_image: Optional[HttpUrl] = None

    @field_validator("month")
    @classmethod
    def validate_month(cls, v: str) -> str:
        # Raises ValueError for malformed keys
        DateRangeCalculator.month_window(v)
        return v


class FeeReview(BaseSchema):
    status: FeeStatus

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: FeeStatus) -> FeeStatus:
        if v not in (FeeStatus.APPROVED, FeeStatus.REJECTED):
            raise ValueError("Status must be APPROVED or REJECTED")
        return v


class FeeHostelBrief(BaseSchema):
    id: str
    hostel_name: str
    city: str


class FeeResponse(BaseResponseSchema):
    manager_id: str
    hostel_id: str
    month: str
    student_count: int
    total_revenue: float
    fee_amount: float
    payment_proof_image: Optional[str] = None
    submitted_at: datetime
    status: FeeStatus
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    hostel: Optional[FeeHostelBrief] = None


class PendingFeeSummary(BaseSchema):
    """What a manager owes for a hostel in the current month."""

    hostel_id: str
    hostel_name: str
    month: str
    active_students: int
    paid_student_count: int
    additional_students: int
    fee_amount: float
    additional_fee_amount: float
    submitted: bool
    status: Optional[FeeStatus] = None
    needs_additional_payment: bool
    note: Optional[str] = None

"""
Reservation schemas.
"""

from typing import Optional

from pydantic import Field, field_validator

from hostelhub.models.base.enums import ReservationStatus, RoomType
from hostelhub.schemas.booking.booking import BookingHostelBrief, BookingStudentBrief
from hostelhub.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = ["ReservationCreate", "ReservationReview", "ReservationResponse"]


class ReservationCreate(BaseCreateSchema):
    hostel_id: str = Field(..., min_length=1)
    room_type: RoomType
    message: Optional[str] = Field(default=None, max_length=1000)


class ReservationReview(BaseSchema):
    status: ReservationStatus
    reject_reason: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: ReservationStatus) -> ReservationStatus:
        if v not in (ReservationStatus.ACCEPTED, ReservationStatus.REJECTED):
            raise ValueError("Status must be ACCEPTED or REJECTED")
        return v


class ReservationResponse(BaseResponseSchema):
    student_id: str
    hostel_id: str
    room_type: RoomType
    message: Optional[str] = None
    status: ReservationStatus
    reject_reason: Optional[str] = None
    hostel: Optional[BookingHostelBrief] = None
    student: Optional[BookingStudentBrief] = None

"""
Booking request and response schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, HttpUrl

from hostelhub.models.base.enums import BookingStatus, BookingType, KickReason, RoomType
from hostelhub.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "BookingCreate",
    "BookingDisapprove",
    "LeaveHostelRequest",
    "KickStudentRequest",
    "BookingHostelBrief",
    "BookingStudentBrief",
    "BookingReviewBrief",
    "BookingResponse",
    "UrgentCompletionResponse",
]


class BookingCreate(BaseCreateSchema):
    """Booking request with proof of the student's payment."""

    hostel_id: str = Field(..., min_length=1)
    room_type: RoomType
    reservation_id: Optional[str] = None
    transaction_image: HttpUrl
    transaction_date: str = Field(..., min_length=1, max_length=20)
    transaction_time: str = Field(..., min_length=1, max_length=20)
    from_account: str = Field(..., min_length=1, max_length=100)
    to_account: str = Field(..., min_length=1, max_length=100)
    booking_type: BookingType = BookingType.REGULAR


class BookingDisapprove(BaseSchema):
    """Refund evidence required to turn a booking down."""

    refund_image: HttpUrl
    refund_date: str = Field(..., min_length=1, max_length=20)
    refund_time: str = Field(..., min_length=1, max_length=20)


class LeaveHostelRequest(BaseSchema):
    rating: int = Field(..., ge=1, le=5)
    review: str = Field(..., min_length=1, max_length=2000)
    reason: Optional[str] = Field(default=None, max_length=1000)


class KickStudentRequest(BaseSchema):
    kick_reason: KickReason


class BookingHostelBrief(BaseSchema):
    id: str
    hostel_name: str
    city: str
    address: str


class BookingStudentBrief(BaseSchema):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    institute: Optional[str] = None


class BookingReviewBrief(BaseSchema):
    id: str
    rating: int
    comment: str


class BookingResponse(BaseResponseSchema):
    student_id: str
    hostel_id: str
    reservation_id: Optional[str] = None
    room_type: RoomType
    status: BookingStatus
    booking_type: BookingType
    amount: float
    transaction_image: str
    transaction_date: str
    transaction_time: str
    from_account: str
    to_account: str
    refund_image: Optional[str] = None
    refund_date: Optional[str] = None
    refund_time: Optional[str] = None
    kick_reason: Optional[KickReason] = None
    kick_by_manager_id: Optional[str] = None
    leave_reason: Optional[str] = None
    leave_date: Optional[datetime] = None
    urgent_leave_date: Optional[datetime] = None
    hostel: Optional[BookingHostelBrief] = None
    student: Optional[BookingStudentBrief] = None
    review: Optional[BookingReviewBrief] = None


class UrgentCompletionResponse(BaseSchema):
    completed: int
    booking_ids: List[str] = Field(default_factory=list)

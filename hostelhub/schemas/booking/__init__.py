from hostelhub.schemas.booking.booking import (
    BookingCreate,
    BookingDisapprove,
    BookingHostelBrief,
    BookingResponse,
    BookingReviewBrief,
    BookingStudentBrief,
    KickStudentRequest,
    LeaveHostelRequest,
    UrgentCompletionResponse,
)

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

from hostelhub.schemas.hostel.hostel import (
    FacilitiesSchema,
    HostelCreate,
    HostelDetailResponse,
    HostelResponse,
    HostelSearchParams,
    HostelStudentResponse,
    HostelUpdate,
    RandomReviewResponse,
    ReviewHostelBrief,
    ReviewResponse,
    RoomTypeConfig,
    RoomTypeResponse,
)

__all__ = [
    "FacilitiesSchema",
    "RoomTypeConfig",
    "HostelCreate",
    "HostelUpdate",
    "HostelSearchParams",
    "RoomTypeResponse",
    "HostelResponse",
    "ReviewResponse",
    "HostelDetailResponse",
    "ReviewHostelBrief",
    "RandomReviewResponse",
    "HostelStudentResponse",
]

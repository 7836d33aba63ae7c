from hostelhub.models.base.base_model import Base, BaseModel, TimestampModel
from hostelhub.models.base.enums import (
    ACTIVE_RESERVATION_STATUSES,
    STAYED_BOOKING_STATUSES,
    BookingStatus,
    BookingType,
    ElectricityType,
    FeeStatus,
    HostelFor,
    KickReason,
    ReportStatus,
    ReservationStatus,
    RoomType,
    UserRole,
    VerificationStatus,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "ACTIVE_RESERVATION_STATUSES",
    "STAYED_BOOKING_STATUSES",
    "BookingStatus",
    "BookingType",
    "ElectricityType",
    "FeeStatus",
    "HostelFor",
    "KickReason",
    "ReportStatus",
    "ReservationStatus",
    "RoomType",
    "UserRole",
    "VerificationStatus",
]

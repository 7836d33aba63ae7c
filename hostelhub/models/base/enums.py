"""
Database enums shared by models and Pydantic schemas.

Values equal names so they serialize the same way in the database and
over the API.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    STUDENT = "STUDENT"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"
    SUBADMIN = "SUBADMIN"


class RoomType(str, enum.Enum):
    """Room configuration offered by a hostel."""
    SHARED = "SHARED"
    PRIVATE = "PRIVATE"
    SHARED_FULLROOM = "SHARED_FULLROOM"


class HostelFor(str, enum.Enum):
    """Residents a hostel accepts."""
    BOYS = "BOYS"
    GIRLS = "GIRLS"


class ElectricityType(str, enum.Enum):
    INCLUDED = "INCLUDED"
    SELF = "SELF"


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DISAPPROVED = "DISAPPROVED"
    LEFT = "LEFT"
    COMPLETED = "COMPLETED"


class BookingType(str, enum.Enum):
    """REGULAR follows the monthly cycle; URGENT is an off-cycle stay."""
    REGULAR = "REGULAR"
    URGENT = "URGENT"


class KickReason(str, enum.Enum):
    LEFT_HOSTEL = "LEFT_HOSTEL"
    VIOLATED_RULES = "VIOLATED_RULES"


class ReservationStatus(str, enum.Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class FeeStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class VerificationStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ReportStatus(str, enum.Enum):
    PENDING = "PENDING"
    RESOLVED = "RESOLVED"
    DISMISSED = "DISMISSED"


# Bookings that count as a student having stayed in the hostel
STAYED_BOOKING_STATUSES = (
    BookingStatus.APPROVED,
    BookingStatus.LEFT,
    BookingStatus.COMPLETED,
)

ACTIVE_RESERVATION_STATUSES = (
    ReservationStatus.PENDING,
    ReservationStatus.ACCEPTED,
)

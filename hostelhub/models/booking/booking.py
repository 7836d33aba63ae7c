"""
Booking model.

A booking links one student profile to one hostel room type and moves
through PENDING -> APPROVED -> {LEFT, COMPLETED}, or PENDING -> DISAPPROVED.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelhub.models.base.base_model import TimestampModel
from hostelhub.models.base.enums import BookingStatus, BookingType, KickReason, RoomType

if TYPE_CHECKING:
    from hostelhub.models.hostel.hostel import Hostel
    from hostelhub.models.review.review import Review
    from hostelhub.models.user.user import StudentProfile

__all__ = ["Booking"]


class Booking(TimestampModel):
    """
    Room booking with payment evidence.

    Attributes:
        reservation_id: Accepted reservation this booking converted, if any
        amount: Price charged (room price, or urgent price for URGENT)
        transaction_*: Payment evidence submitted by the student
        refund_*: Refund evidence required when the manager disapproves
        kick_reason: LEFT_HOSTEL for voluntary departures, or the manager's reason
        kick_by_manager_id: Manager who removed the student
        urgent_leave_date: Scheduled departure for URGENT bookings
    """

    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_hostel_status", "hostel_id", "status"),
    )

    student_id: Mapped[str] = mapped_column(
        ForeignKey("student_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    hostel_id: Mapped[str] = mapped_column(
        ForeignKey("hostels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    reservation_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("reservations.id", ondelete="SET NULL"),
        nullable=True,
    )
    room_type: Mapped[RoomType] = mapped_column(Enum(RoomType, name="room_type"), nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status"),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )
    booking_type: Mapped[BookingType] = mapped_column(
        Enum(BookingType, name="booking_type"),
        nullable=False,
        default=BookingType.REGULAR,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    # Payment evidence
    transaction_image: Mapped[str] = mapped_column(String(500), nullable=False)
    transaction_date: Mapped[str] = mapped_column(String(20), nullable=False)
    transaction_time: Mapped[str] = mapped_column(String(20), nullable=False)
    from_account: Mapped[str] = mapped_column(String(100), nullable=False)
    to_account: Mapped[str] = mapped_column(String(100), nullable=False)

    # Refund evidence
    refund_image: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    refund_date: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    refund_time: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Departure
    kick_reason: Mapped[Optional[KickReason]] = mapped_column(
        Enum(KickReason, name="kick_reason"),
        nullable=True,
    )
    kick_by_manager_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("manager_profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    leave_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    leave_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    urgent_leave_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)

    student: Mapped["StudentProfile"] = relationship(foreign_keys=[student_id])
    hostel: Mapped["Hostel"] = relationship(foreign_keys=[hostel_id])
    review: Mapped[Optional["Review"]] = relationship(back_populates="booking", uselist=False)

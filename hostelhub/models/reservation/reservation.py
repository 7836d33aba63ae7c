"""Reservation model: a student's pre-booking intent for one room type."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Enum, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelhub.models.base.base_model import TimestampModel
from hostelhub.models.base.enums import ReservationStatus, RoomType

if TYPE_CHECKING:
    from hostelhub.models.hostel.hostel import Hostel
    from hostelhub.models.user.user import StudentProfile

__all__ = ["Reservation"]


class Reservation(TimestampModel):
    __tablename__ = "reservations"
    __table_args__ = (
        Index("ix_reservations_student_hostel_type", "student_id", "hostel_id", "room_type"),
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
    room_type: Mapped[RoomType] = mapped_column(Enum(RoomType, name="room_type"), nullable=False)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus, name="reservation_status"),
        nullable=False,
        default=ReservationStatus.PENDING,
        index=True,
    )
    reject_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    student: Mapped["StudentProfile"] = relationship(foreign_keys=[student_id])
    hostel: Mapped["Hostel"] = relationship(foreign_keys=[hostel_id])

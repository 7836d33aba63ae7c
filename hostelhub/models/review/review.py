"""Review model: one per booking, written when the student leaves."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelhub.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from hostelhub.models.booking.booking import Booking
    from hostelhub.models.hostel.hostel import Hostel
    from hostelhub.models.user.user import StudentProfile

__all__ = ["Review"]


class Review(TimestampModel):
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )

    booking_id: Mapped[str] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    hostel_id: Mapped[str] = mapped_column(
        ForeignKey("hostels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id: Mapped[str] = mapped_column(
        ForeignKey("student_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)

    booking: Mapped["Booking"] = relationship(back_populates="review")
    hostel: Mapped["Hostel"] = relationship(foreign_keys=[hostel_id])
    student: Mapped["StudentProfile"] = relationship(foreign_keys=[student_id])

    @property
    def reviewer_email(self) -> Optional[str]:
        if self.student is None or self.student.user is None:
            return None
        return self.student.user.email

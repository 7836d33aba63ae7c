"""
Booking repository: lookups by student, hostel and status, plus the
monthly REGULAR booking statistics used for platform fees.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from hostelhub.models.base.enums import (
    STAYED_BOOKING_STATUSES,
    BookingStatus,
    BookingType,
    RoomType,
)
from hostelhub.models.booking.booking import Booking
from hostelhub.models.user.user import StudentProfile
from hostelhub.repositories.base.base_repository import BaseRepository


class BookingRepository(BaseRepository[Booking]):

    def __init__(self, db: Session):
        super().__init__(Booking, db)

    def _with_details(self):
        return self.db.query(Booking).options(
            joinedload(Booking.hostel),
            joinedload(Booking.student).joinedload(StudentProfile.user),
            joinedload(Booking.review),
        )

    def find_with_details(self, booking_id: str) -> Optional[Booking]:
        return self._with_details().filter(Booking.id == booking_id).first()

    def find_by_student(self, student_id: str) -> List[Booking]:
        return (
            self._with_details()
            .filter(Booking.student_id == student_id)
            .order_by(Booking.created_at.desc())
            .all()
        )

    def find_by_hostels(
        self,
        hostel_ids: Sequence[str],
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        if not hostel_ids:
            return []
        query = self._with_details().filter(Booking.hostel_id.in_(list(hostel_ids)))
        if status is not None:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.created_at.desc()).all()

    def find_all_by_status(self, status: Optional[BookingStatus] = None) -> List[Booking]:
        query = self._with_details()
        if status is not None:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.created_at.desc()).all()

    def find_active_stay(self, student_id: str, hostel_id: str) -> Optional[Booking]:
        """APPROVED booking of the student at ``hostel_id``, newest first."""
        return (
            self.db.query(Booking)
            .filter(
                Booking.student_id == student_id,
                Booking.hostel_id == hostel_id,
                Booking.status == BookingStatus.APPROVED,
            )
            .order_by(Booking.created_at.desc())
            .first()
        )

    def find_latest_left(self, student_id: str) -> Optional[Booking]:
        return (
            self.db.query(Booking)
            .options(joinedload(Booking.review))
            .filter(Booking.student_id == student_id, Booking.status == BookingStatus.LEFT)
            .order_by(Booking.updated_at.desc())
            .first()
        )

    def find_approved_by_student(self, student_id: str) -> List[Booking]:
        return (
            self.db.query(Booking)
            .filter(Booking.student_id == student_id, Booking.status == BookingStatus.APPROVED)
            .all()
        )

    def has_approved(self, hostel_id: str, room_type: Optional[RoomType] = None) -> bool:
        query = self.db.query(Booking.id).filter(
            Booking.hostel_id == hostel_id,
            Booking.status == BookingStatus.APPROVED,
        )
        if room_type is not None:
            query = query.filter(Booking.room_type == room_type)
        return query.first() is not None

    def has_stayed(self, student_id: str, hostel_id: str) -> bool:
        return (
            self.db.query(Booking.id)
            .filter(
                Booking.student_id == student_id,
                Booking.hostel_id == hostel_id,
                Booking.status.in_(STAYED_BOOKING_STATUSES),
            )
            .first()
            is not None
        )

    def find_due_urgent(self, moment: datetime) -> List[Booking]:
        """APPROVED URGENT bookings whose scheduled leave date has arrived."""
        return (
            self.db.query(Booking)
            .filter(
                Booking.status == BookingStatus.APPROVED,
                Booking.booking_type == BookingType.URGENT,
                Booking.urgent_leave_date.is_not(None),
                Booking.urgent_leave_date <= moment,
            )
            .all()
        )

    def regular_month_stats(
        self,
        hostel_id: str,
        window_start: datetime,
        window_end: datetime,
    ) -> Tuple[int, Decimal]:
        """
        Count and revenue of REGULAR bookings created in ``[window_start, window_end)``
        that reached APPROVED (currently APPROVED, LEFT or COMPLETED).
        """
        count, revenue = (
            self.db.query(func.count(Booking.id), func.coalesce(func.sum(Booking.amount), 0))
            .filter(
                Booking.hostel_id == hostel_id,
                Booking.booking_type == BookingType.REGULAR,
                Booking.status.in_(STAYED_BOOKING_STATUSES),
                Booking.created_at >= window_start,
                Booking.created_at < window_end,
            )
            .one()
        )
        return int(count), Decimal(str(revenue)).quantize(Decimal("0.01"))


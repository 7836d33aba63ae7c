"""Reservation repository."""

from typing import List, Optional, Sequence

from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload

from hostelhub.models.base.enums import ACTIVE_RESERVATION_STATUSES, ReservationStatus, RoomType
from hostelhub.models.reservation.reservation import Reservation
from hostelhub.models.user.user import StudentProfile
from hostelhub.repositories.base.base_repository import BaseRepository


class ReservationRepository(BaseRepository[Reservation]):

    def __init__(self, db: Session):
        super().__init__(Reservation, db)

    def find_active(self, student_id: str, hostel_id: str, room_type: RoomType) -> Optional[Reservation]:
        return (
            self.db.query(Reservation)
            .filter(
                Reservation.student_id == student_id,
                Reservation.hostel_id == hostel_id,
                Reservation.room_type == room_type,
                Reservation.status.in_(ACTIVE_RESERVATION_STATUSES),
            )
            .first()
        )

    def find_by_student(self, student_id: str) -> List[Reservation]:
        return (
            self.db.query(Reservation)
            .options(joinedload(Reservation.hostel))
            .filter(Reservation.student_id == student_id)
            .order_by(Reservation.created_at.desc())
            .all()
        )

    def find_by_hostels(self, hostel_ids: Sequence[str]) -> List[Reservation]:
        if not hostel_ids:
            return []
        return (
            self.db.query(Reservation)
            .options(
                joinedload(Reservation.hostel),
                joinedload(Reservation.student).joinedload(StudentProfile.user),
            )
            .filter(Reservation.hostel_id.in_(list(hostel_ids)))
            .order_by(Reservation.created_at.desc())
            .all()
        )

    def cancel_pending_for_student(self, student_id: str) -> int:
        """Cancel every PENDING reservation of the student."""
        self.db.flush()
        result = self.db.execute(
            update(Reservation)
            .where(
                Reservation.student_id == student_id,
                Reservation.status == ReservationStatus.PENDING,
            )
            .values(status=ReservationStatus.CANCELLED)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

"""
Reservation service: students hold interest in a room type before booking,
managers accept or reject.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelhub.core.exceptions import (
    AuthorizationError,
    BusinessRuleError,
    ConflictError,
    HostelNotFoundError,
    InvalidStateError,
    ReservationNotFoundError,
)
from hostelhub.models.base.enums import ReservationStatus
from hostelhub.models.reservation.reservation import Reservation
from hostelhub.repositories.hostel.hostel_repository import HostelRepository, RoomTypeRepository
from hostelhub.repositories.reservation.reservation_repository import ReservationRepository
from hostelhub.schemas.reservation.reservation import ReservationCreate, ReservationReview
from hostelhub.services.base import BaseService, ProfileLookupMixin, ServiceResult
from hostelhub.utils.datetime_utils import Clock


class ReservationService(ProfileLookupMixin, BaseService):

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.reservations = ReservationRepository(db_session)
        self.hostels = HostelRepository(db_session)
        self.room_types = RoomTypeRepository(db_session)

    def create_reservation(self, user_id: str, data: ReservationCreate) -> ServiceResult[Reservation]:
        """
        Reserve interest in a room type.

        Only self-verified students without a current hostel may reserve,
        and only one PENDING or ACCEPTED reservation may exist per hostel
        and room type.
        """
        try:
            student = self._student_profile(user_id)
            if not student.self_verified:
                raise BusinessRuleError("Please complete self verification first")
            if student.current_hostel_id:
                raise BusinessRuleError("You already have an active hostel")

            hostel = self.hostels.find_by_id(data.hostel_id)
            if hostel is None or not hostel.is_active:
                raise HostelNotFoundError(data.hostel_id)
            if self.room_types.find_room_type(hostel.id, data.room_type) is None:
                raise BusinessRuleError("Room type not available in this hostel")
            if self.reservations.find_active(student.id, hostel.id, data.room_type) is not None:
                raise ConflictError(
                    "You already have an active reservation for this room type at this hostel"
                )

            now = self.now()
            with self.transaction():
                reservation = self.reservations.create(
                    Reservation(
                        student_id=student.id,
                        hostel_id=hostel.id,
                        room_type=data.room_type,
                        message=data.message,
                        status=ReservationStatus.PENDING,
                        created_at=now,
                        updated_at=now,
                    )
                )

            self._logger.info(
                f"Reservation {reservation.id} created",
                extra={"hostel_id": hostel.id, "room_type": data.room_type.value},
            )
            return ServiceResult.success(reservation, message="Reservation created successfully")
        except Exception as e:
            return self._handle_exception(e, "create reservation", data.hostel_id)

    def get_my_reservations(self, user_id: str) -> ServiceResult[List[Reservation]]:
        try:
            student = self._student_profile(user_id)
            return ServiceResult.success(self.reservations.find_by_student(student.id))
        except Exception as e:
            return self._handle_exception(e, "get student reservations", user_id)

    def cancel_reservation(self, user_id: str, reservation_id: str) -> ServiceResult[Reservation]:
        try:
            student = self._student_profile(user_id)
            reservation = self.reservations.find_by_id(reservation_id)
            if reservation is None or reservation.student_id != student.id:
                raise ReservationNotFoundError(reservation_id)
            if reservation.status != ReservationStatus.PENDING:
                raise InvalidStateError(
                    "Can only cancel pending reservations",
                    current_status=reservation.status.value,
                )

            with self.transaction():
                self.reservations.update(
                    reservation,
                    {"status": ReservationStatus.CANCELLED, "updated_at": self.now()},
                )

            self._logger.info(f"Reservation {reservation.id} cancelled by student")
            return ServiceResult.success(reservation, message="Reservation cancelled")
        except Exception as e:
            return self._handle_exception(e, "cancel reservation", reservation_id)

    def get_hostel_reservations(self, user_id: str, hostel_id: str) -> ServiceResult[List[Reservation]]:
        try:
            manager = self._manager_profile(user_id)
            hostel = self._owned_hostel(manager, hostel_id)
            return ServiceResult.success(self.reservations.find_by_hostels([hostel.id]))
        except Exception as e:
            return self._handle_exception(e, "get hostel reservations", hostel_id)

    def review_reservation(
        self,
        user_id: str,
        reservation_id: str,
        data: ReservationReview,
    ) -> ServiceResult[Reservation]:
        """Accept or reject a PENDING reservation at one of the manager's hostels."""
        try:
            manager = self._manager_profile(user_id)
            reservation = self.reservations.find_by_id(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            if reservation.hostel.manager_id != manager.id:
                raise AuthorizationError("Reservation not found or not authorized")
            if reservation.status != ReservationStatus.PENDING:
                raise InvalidStateError(
                    "Reservation already reviewed",
                    current_status=reservation.status.value,
                )

            reject_reason = data.reject_reason if data.status == ReservationStatus.REJECTED else None
            with self.transaction():
                self.reservations.update(
                    reservation,
                    {"status": data.status, "reject_reason": reject_reason, "updated_at": self.now()},
                )

            self._logger.info(
                f"Reservation {reservation.id} reviewed",
                extra={"status": data.status.value, "hostel_id": reservation.hostel_id},
            )
            return ServiceResult.success(reservation, message=f"Reservation {data.status.value.lower()}")
        except Exception as e:
            return self._handle_exception(e, "review reservation", reservation_id)

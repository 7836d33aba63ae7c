"""
Booking lifecycle service.

    PENDING --approve--> APPROVED --leave/kick--> LEFT
       |                    |
       +--disapprove--> DISAPPROVED    +--urgent leave date--> COMPLETED

Approval takes one room of the booked type, every exit from APPROVED gives
it back. A student lives in at most one hostel at a time.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from hostelhub.config.settings import settings
from hostelhub.core.exceptions import (
    AuthorizationError,
    BookingNotFoundError,
    BookingPeriodError,
    BusinessRuleError,
    DuplicateReviewError,
    HostelNotFoundError,
    InvalidStateError,
    ReservationNotFoundError,
    RoomUnavailableError,
)
from hostelhub.models.base.enums import (
    BookingStatus,
    BookingType,
    KickReason,
    ReservationStatus,
    UserRole,
)
from hostelhub.models.booking.booking import Booking
from hostelhub.models.hostel.hostel import HostelRoomType
from hostelhub.models.review.review import Review
from hostelhub.models.user.user import ManagerProfile, User
from hostelhub.repositories.audit.audit_repository import AuditLogRepository
from hostelhub.repositories.booking.booking_repository import BookingRepository
from hostelhub.repositories.hostel.hostel_repository import HostelRepository, RoomTypeRepository
from hostelhub.repositories.reservation.reservation_repository import ReservationRepository
from hostelhub.repositories.review.review_repository import ReviewRepository
from hostelhub.repositories.user.user_repository import StudentProfileRepository
from hostelhub.schemas.booking.booking import (
    BookingCreate,
    BookingDisapprove,
    KickStudentRequest,
    LeaveHostelRequest,
    UrgentCompletionResponse,
)
from hostelhub.services.base import BaseService, ProfileLookupMixin, ServiceResult
from hostelhub.services.fee.fee_service import FeeService
from hostelhub.services.hostel.hostel_service import HostelService
from hostelhub.utils.datetime_utils import Clock, DateRangeCalculator

BOOKING_TARGET_TYPE = "Booking"


class BookingService(ProfileLookupMixin, BaseService):
    """Create, approve, disapprove and end bookings."""

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.bookings = BookingRepository(db_session)
        self.hostels = HostelRepository(db_session)
        self.room_types = RoomTypeRepository(db_session)
        self.students = StudentProfileRepository(db_session)
        self.reservations = ReservationRepository(db_session)
        self.reviews = ReviewRepository(db_session)
        self.audit = AuditLogRepository(db_session)
        self.hostel_service = HostelService(db_session, clock)
        self.fee_service = FeeService(db_session, clock)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _check_booking_period(self, booking_type: BookingType, moment: datetime) -> None:
        """
        REGULAR bookings are accepted up to ``REGULAR_BOOKING_LAST_DAY``;
        after that only URGENT bookings are. URGENT is open all month.
        """
        day = DateRangeCalculator.day_of_month(moment)
        last_day = settings.REGULAR_BOOKING_LAST_DAY

        if booking_type == BookingType.REGULAR and day > last_day:
            raise BookingPeriodError(
                f"Regular bookings are only accepted until day {last_day} of the month. "
                "Please make an urgent booking instead.",
                day_of_month=day,
            )

    @staticmethod
    def _booking_amount(room: HostelRoomType, booking_type: BookingType) -> Decimal:
        if booking_type == BookingType.URGENT:
            if room.urgent_booking_price is None:
                raise BusinessRuleError("Urgent booking is not offered for this room type")
            return room.urgent_booking_price
        return room.price

    def _managed_booking(self, manager: ManagerProfile, booking_id: str) -> Booking:
        booking = self.bookings.find_with_details(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        if booking.hostel.manager_id != manager.id:
            raise AuthorizationError("Not authorized")
        return booking

    # -------------------------------------------------------------------------
    # Student operations
    # -------------------------------------------------------------------------

    def create_booking(self, user_id: str, data: BookingCreate) -> ServiceResult[Booking]:
        """
        Create a PENDING booking backed by the student's payment evidence.

        URGENT bookings pay the room type's urgent price and end on the
        1st of the next month. A referenced reservation must be the
        student's ACCEPTED reservation at the same hostel and is consumed.
        """
        try:
            student = self._student_profile(user_id)
            if student.current_hostel_id:
                raise BusinessRuleError("Already booked in a hostel")

            hostel = self.hostels.find_by_id(data.hostel_id)
            if hostel is None:
                raise HostelNotFoundError(data.hostel_id)
            if not hostel.is_active:
                raise BusinessRuleError("Hostel is not active")

            room = self.room_types.find_room_type(hostel.id, data.room_type)
            if room is None:
                raise BusinessRuleError("Room type not available in this hostel")
            if room.available_rooms <= 0:
                raise RoomUnavailableError(hostel_id=hostel.id, room_type=data.room_type.value)

            now = self.now()
            self._check_booking_period(data.booking_type, now)
            amount = self._booking_amount(room, data.booking_type)

            reservation = None
            if data.reservation_id:
                reservation = self.reservations.find_by_id(data.reservation_id)
                if reservation is None:
                    raise ReservationNotFoundError(data.reservation_id)
                if reservation.student_id != student.id:
                    raise AuthorizationError("Reservation does not belong to this student")
                if reservation.status != ReservationStatus.ACCEPTED:
                    raise InvalidStateError(
                        "Reservation is not accepted",
                        current_status=reservation.status.value,
                    )
                if reservation.hostel_id != hostel.id:
                    raise BusinessRuleError("Reservation is for a different hostel")

            booking = Booking(
                student_id=student.id,
                hostel_id=hostel.id,
                reservation_id=reservation.id if reservation else None,
                room_type=data.room_type,
                status=BookingStatus.PENDING,
                booking_type=data.booking_type,
                amount=amount,
                transaction_image=str(data.transaction_image),
                transaction_date=data.transaction_date,
                transaction_time=data.transaction_time,
                from_account=data.from_account,
                to_account=data.to_account,
                urgent_leave_date=(
                    DateRangeCalculator.next_month_start(now)
                    if data.booking_type == BookingType.URGENT
                    else None
                ),
                created_at=now,
                updated_at=now,
            )

            with self.transaction():
                self.bookings.create(booking)
                if reservation is not None:
                    self.reservations.update(reservation, {"status": ReservationStatus.CANCELLED})

            self._logger.info(
                f"Booking {booking.id} created",
                extra={
                    "student_id": student.id,
                    "hostel_id": hostel.id,
                    "room_type": data.room_type.value,
                    "booking_type": data.booking_type.value,
                },
            )
            return ServiceResult.success(
                self.bookings.find_with_details(booking.id),
                message="Booking created successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "create booking", data.hostel_id)

    def leave_hostel(self, user_id: str, data: LeaveHostelRequest) -> ServiceResult[Booking]:
        """
        End the student's stay and record their review of the hostel.

        Each booking can be reviewed once; a student who already left and
        reviewed gets the duplicate review error rather than a missing-stay one.
        """
        try:
            student = self._student_profile(user_id)

            if not student.current_hostel_id:
                latest = self.bookings.find_latest_left(student.id)
                if latest is not None and latest.review is not None:
                    raise DuplicateReviewError(latest.id)
                raise BusinessRuleError("Not currently in a hostel")

            booking = self.bookings.find_active_stay(student.id, student.current_hostel_id)
            if booking is None:
                raise BusinessRuleError("No active booking found")
            if self.reviews.find_by_booking(booking.id) is not None:
                raise DuplicateReviewError(booking.id)

            now = self.now()
            with self.transaction():
                self.bookings.update(
                    booking,
                    {
                        "status": BookingStatus.LEFT,
                        "kick_reason": KickReason.LEFT_HOSTEL,
                        "leave_reason": data.reason,
                        "leave_date": now,
                        "updated_at": now,
                    },
                )
                self.students.update(student, {"current_hostel_id": None})
                self.room_types.release_room(booking.hostel_id, booking.room_type)
                self.reviews.create(
                    Review(
                        booking_id=booking.id,
                        hostel_id=booking.hostel_id,
                        student_id=student.id,
                        rating=data.rating,
                        comment=data.review,
                        created_at=now,
                        updated_at=now,
                    )
                )
                self.hostel_service.apply_rating(booking.hostel_id)

            self._logger.info(
                f"Student {student.id} left hostel {booking.hostel_id}",
                extra={"booking_id": booking.id, "rating": data.rating},
            )
            return ServiceResult.success(
                self.bookings.find_with_details(booking.id),
                message="You have left the hostel",
            )
        except Exception as e:
            return self._handle_exception(e, "leave hostel", user_id)

    def get_my_bookings(self, user_id: str) -> ServiceResult[List[Booking]]:
        try:
            student = self._student_profile(user_id)
            return ServiceResult.success(self.bookings.find_by_student(student.id))
        except Exception as e:
            return self._handle_exception(e, "get student bookings", user_id)

    # -------------------------------------------------------------------------
    # Manager operations
    # -------------------------------------------------------------------------

    def approve_booking(self, user_id: str, booking_id: str) -> ServiceResult[Booking]:
        """
        Approve a PENDING booking and move the student in.

        The room is taken with a conditional decrement, so when the last
        room is gone the approval fails and nothing changes. An URGENT
        booking whose leave date has passed can no longer be approved.
        A REGULAR approval may re-open the month's already approved
        platform fee.
        """
        try:
            manager = self._manager_profile(user_id)
            booking = self._managed_booking(manager, booking_id)
            if booking.status != BookingStatus.PENDING:
                raise InvalidStateError("Booking is not pending", current_status=booking.status.value)
            if booking.urgent_leave_date is not None and booking.urgent_leave_date <= self.now():
                raise InvalidStateError(
                    "Urgent booking period has already ended",
                    current_status=booking.status.value,
                    details={"urgent_leave_date": booking.urgent_leave_date.isoformat()},
                )

            student = booking.student
            if student.current_hostel_id:
                raise BusinessRuleError("Student already has an active hostel")

            with self.transaction():
                self.room_types.reserve_room(booking.hostel_id, booking.room_type)
                self.bookings.update(
                    booking,
                    {"status": BookingStatus.APPROVED, "updated_at": self.now()},
                )
                self.students.update(student, {"current_hostel_id": booking.hostel_id})
                cancelled = self.reservations.cancel_pending_for_student(student.id)
                if booking.booking_type == BookingType.REGULAR:
                    self.fee_service.reopen_for_new_student(booking.hostel_id, booking.created_at)

            self._logger.info(
                f"Booking {booking.id} approved",
                extra={
                    "hostel_id": booking.hostel_id,
                    "student_id": student.id,
                    "cancelled_reservations": cancelled,
                },
            )
            return ServiceResult.success(
                self.bookings.find_with_details(booking.id),
                message="Booking approved successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "approve booking", booking_id)

    def disapprove_booking(self, user_id: str, booking_id: str, data: BookingDisapprove) -> ServiceResult[Booking]:
        """Turn down a PENDING booking with evidence of the refund."""
        try:
            manager = self._manager_profile(user_id)
            booking = self._managed_booking(manager, booking_id)
            if booking.status != BookingStatus.PENDING:
                raise InvalidStateError("Booking is not pending", current_status=booking.status.value)

            with self.transaction():
                self.bookings.update(
                    booking,
                    {
                        "status": BookingStatus.DISAPPROVED,
                        "refund_image": str(data.refund_image),
                        "refund_date": data.refund_date,
                        "refund_time": data.refund_time,
                        "updated_at": self.now(),
                    },
                )

            self._logger.info(f"Booking {booking.id} disapproved", extra={"hostel_id": booking.hostel_id})
            return ServiceResult.success(booking, message="Booking disapproved")
        except Exception as e:
            return self._handle_exception(e, "disapprove booking", booking_id)

    def kick_student(self, user_id: str, booking_id: str, data: KickStudentRequest) -> ServiceResult[Booking]:
        try:
            manager = self._manager_profile(user_id)
            booking = self._managed_booking(manager, booking_id)
            if booking.status != BookingStatus.APPROVED:
                raise InvalidStateError("Booking is not active", current_status=booking.status.value)

            now = self.now()
            with self.transaction():
                self.bookings.update(
                    booking,
                    {
                        "status": BookingStatus.LEFT,
                        "kick_reason": data.kick_reason,
                        "kick_by_manager_id": manager.id,
                        "leave_date": now,
                        "updated_at": now,
                    },
                )
                student = booking.student
                if student.current_hostel_id == booking.hostel_id:
                    self.students.update(student, {"current_hostel_id": None})
                self.room_types.release_room(booking.hostel_id, booking.room_type)
                self.audit.log(
                    f"STUDENT_KICKED_{data.kick_reason.value}",
                    manager.user_id,
                    BOOKING_TARGET_TYPE,
                    booking.id,
                    {"student_id": booking.student_id, "hostel_id": booking.hostel_id},
                )

            self._logger.info(
                f"Student {booking.student_id} removed from hostel {booking.hostel_id}",
                extra={"booking_id": booking.id, "kick_reason": data.kick_reason.value},
            )
            return ServiceResult.success(booking, message="Student removed from hostel")
        except Exception as e:
            return self._handle_exception(e, "kick student", booking_id)

    def get_manager_bookings(self, user_id: str) -> ServiceResult[List[Booking]]:
        try:
            manager = self._manager_profile(user_id)
            hostel_ids = self.hostels.find_ids_by_manager(manager.id)
            return ServiceResult.success(self.bookings.find_by_hostels(hostel_ids))
        except Exception as e:
            return self._handle_exception(e, "get manager bookings", user_id)

    def get_hostel_bookings(
        self,
        user_id: str,
        hostel_id: str,
        status: Optional[BookingStatus] = None,
    ) -> ServiceResult[List[Booking]]:
        try:
            manager = self._manager_profile(user_id)
            hostel = self._owned_hostel(manager, hostel_id)
            return ServiceResult.success(self.bookings.find_by_hostels([hostel.id], status))
        except Exception as e:
            return self._handle_exception(e, "get hostel bookings", hostel_id)

    # -------------------------------------------------------------------------
    # Admin and shared reads
    # -------------------------------------------------------------------------

    def get_all_bookings(self, status: Optional[BookingStatus] = None) -> ServiceResult[List[Booking]]:
        try:
            return ServiceResult.success(self.bookings.find_all_by_status(status))
        except Exception as e:
            return self._handle_exception(e, "get all bookings")

    def get_booking(self, booking_id: str, requester: User) -> ServiceResult[Booking]:
        """
        A single booking, visible to admins, the booking's student and the
        manager of its hostel.
        """
        try:
            booking = self.bookings.find_with_details(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)

            if requester.role == UserRole.STUDENT:
                if booking.student.user_id != requester.id:
                    raise AuthorizationError("Not authorized")
            elif requester.role == UserRole.MANAGER:
                manager = self._manager_profile(requester.id)
                if booking.hostel.manager_id != manager.id:
                    raise AuthorizationError("Not authorized")

            return ServiceResult.success(booking)
        except Exception as e:
            return self._handle_exception(e, "get booking", booking_id)

    # -------------------------------------------------------------------------
    # Scheduled completion
    # -------------------------------------------------------------------------

    def complete_due_urgent_bookings(
        self,
        today: Optional[Union[date, datetime]] = None,
    ) -> ServiceResult[UrgentCompletionResponse]:
        """
        Complete APPROVED URGENT bookings whose leave date has arrived,
        returning their rooms and moving the students out.
        """
        try:
            if today is None:
                moment = self.now()
            elif isinstance(today, datetime):
                moment = today
            else:
                moment = datetime(today.year, today.month, today.day)

            due = self.bookings.find_due_urgent(moment)
            with self.transaction():
                for booking in due:
                    self.bookings.update(
                        booking,
                        {
                            "status": BookingStatus.COMPLETED,
                            "leave_date": booking.urgent_leave_date,
                            "updated_at": self.now(),
                        },
                    )
                    student = self.students.find_by_id(booking.student_id)
                    if student is not None and student.current_hostel_id == booking.hostel_id:
                        self.students.update(student, {"current_hostel_id": None})
                    self.room_types.release_room(booking.hostel_id, booking.room_type)

            booking_ids = [booking.id for booking in due]
            self._logger.info(
                f"Completed {len(booking_ids)} urgent bookings",
                extra={"as_of": moment.isoformat()},
            )
            return ServiceResult.success(
                UrgentCompletionResponse(completed=len(booking_ids), booking_ids=booking_ids),
                message=f"{len(booking_ids)} urgent bookings completed",
            )
        except Exception as e:
            return self._handle_exception(e, "complete urgent bookings")

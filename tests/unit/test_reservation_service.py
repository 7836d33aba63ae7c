import pytest

from hostelhub.core.exceptions import ErrorCode
from hostelhub.models.base.enums import BookingStatus, ReservationStatus, RoomType, UserRole
from hostelhub.models.reservation.reservation import Reservation
from hostelhub.schemas.reservation.reservation import ReservationCreate, ReservationReview
from hostelhub.services.booking import BookingService
from hostelhub.services.reservation import ReservationService
from tests.conftest import booking_payload, make_manager, make_student, make_user


@pytest.fixture
def service(db, clock):
    return ReservationService(db, clock)


def _reserve(service, student, hostel, room_type=RoomType.SHARED):
    return service.create_reservation(
        student.id, ReservationCreate(hostel_id=hostel.id, room_type=room_type, message="Need a room from April")
    )


class TestCreateReservation:
    def test_reservation_starts_pending(self, service, student, hostel):
        result = _reserve(service, student, hostel)

        assert result.is_success
        assert result.data.status == ReservationStatus.PENDING
        assert result.data.message == "Need a room from April"

    def test_student_must_be_self_verified(self, db, service, hostel):
        unverified = make_user(db, "fresh@uni.edu.pk", UserRole.STUDENT)

        result = _reserve(service, unverified, hostel)

        assert result.error_code == ErrorCode.BUSINESS_RULE_VIOLATION
        assert result.message == "Please complete self verification first"

    def test_one_active_reservation_per_room_type(self, service, student, hostel):
        _reserve(service, student, hostel)

        duplicate = _reserve(service, student, hostel)
        other_type = _reserve(service, student, hostel, RoomType.PRIVATE)

        assert duplicate.error_code == ErrorCode.CONFLICT
        assert other_type.is_success

    def test_room_type_must_be_offered(self, service, student, hostel):
        result = _reserve(service, student, hostel, RoomType.SHARED_FULLROOM)

        assert result.error_code == ErrorCode.BUSINESS_RULE_VIOLATION


class TestReservationLifecycle:
    def test_cancel_only_pending(self, service, student, manager, hostel):
        reservation = _reserve(service, student, hostel).data
        service.review_reservation(manager.id, reservation.id, ReservationReview(status=ReservationStatus.ACCEPTED))

        result = service.cancel_reservation(student.id, reservation.id)

        assert result.error_code == ErrorCode.INVALID_STATE
        assert result.message == "Can only cancel pending reservations"

    def test_cancel_own_pending(self, service, student, hostel):
        reservation = _reserve(service, student, hostel).data

        result = service.cancel_reservation(student.id, reservation.id)

        assert result.data.status == ReservationStatus.CANCELLED

    def test_reject_keeps_reason(self, service, student, manager, hostel):
        reservation = _reserve(service, student, hostel).data

        result = service.review_reservation(
            manager.id,
            reservation.id,
            ReservationReview(status=ReservationStatus.REJECTED, reject_reason="Fully booked for April"),
        )

        assert result.data.status == ReservationStatus.REJECTED
        assert result.data.reject_reason == "Fully booked for April"

    def test_review_only_once(self, service, student, manager, hostel):
        reservation = _reserve(service, student, hostel).data
        review = ReservationReview(status=ReservationStatus.ACCEPTED)
        service.review_reservation(manager.id, reservation.id, review)

        assert service.review_reservation(manager.id, reservation.id, review).error_code == ErrorCode.INVALID_STATE

    def test_other_manager_cannot_review(self, db, service, student, hostel):
        intruder = make_manager(db, "intruder@hostels.com.pk")
        reservation = _reserve(service, student, hostel).data

        result = service.review_reservation(
            intruder.id, reservation.id, ReservationReview(status=ReservationStatus.ACCEPTED)
        )

        assert result.error_code == ErrorCode.INSUFFICIENT_PERMISSIONS

    def test_status_must_be_a_decision(self):
        with pytest.raises(ValueError):
            ReservationReview(status=ReservationStatus.CANCELLED)


class TestReservationsAndBookings:
    def test_accepted_reservation_is_consumed_by_booking(self, db, clock, service, student, manager, hostel):
        reservation = _reserve(service, student, hostel).data
        service.review_reservation(manager.id, reservation.id, ReservationReview(status=ReservationStatus.ACCEPTED))

        result = BookingService(db, clock).create_booking(
            student.id, booking_payload(hostel.id, reservation_id=reservation.id)
        )

        assert result.is_success, result.message
        assert result.data.reservation_id == reservation.id
        db.expire_all()
        assert db.get(Reservation, reservation.id).status == ReservationStatus.CANCELLED

    def test_pending_reservation_cannot_back_a_booking(self, db, clock, service, student, hostel):
        reservation = _reserve(service, student, hostel).data

        result = BookingService(db, clock).create_booking(
            student.id, booking_payload(hostel.id, reservation_id=reservation.id)
        )

        assert result.error_code == ErrorCode.INVALID_STATE
        assert result.message == "Reservation is not accepted"

    def test_someone_elses_reservation(self, db, clock, service, student, manager, hostel):
        other = make_student(db, "other@uni.edu.pk")
        reservation = _reserve(service, other, hostel).data
        service.review_reservation(manager.id, reservation.id, ReservationReview(status=ReservationStatus.ACCEPTED))

        result = BookingService(db, clock).create_booking(
            student.id, booking_payload(hostel.id, reservation_id=reservation.id)
        )

        assert result.error_code == ErrorCode.INSUFFICIENT_PERMISSIONS

    def test_approval_cancels_pending_reservations(self, db, clock, service, student, manager, hostel):
        pending = _reserve(service, student, hostel, RoomType.PRIVATE).data
        bookings = BookingService(db, clock)
        booking = bookings.create_booking(student.id, booking_payload(hostel.id)).data

        approved = bookings.approve_booking(manager.id, booking.id)

        assert approved.data.status == BookingStatus.APPROVED
        db.expire_all()
        assert db.get(Reservation, pending.id).status == ReservationStatus.CANCELLED
        assert _reserve(service, student, hostel).message == "You already have an active hostel"

    def test_manager_lists_hostel_reservations(self, service, student, manager, hostel):
        _reserve(service, student, hostel)

        result = service.get_hostel_reservations(manager.id, hostel.id)

        assert [r.student.email for r in result.data] == ["ali@uni.edu.pk"]

from datetime import date, datetime
from decimal import Decimal

import pytest

from hostelhub.core.exceptions import ErrorCode
from hostelhub.models.audit.audit_log import AuditLog
from hostelhub.models.base.enums import BookingStatus, BookingType, KickReason, RoomType
from hostelhub.models.booking.booking import Booking
from hostelhub.repositories.hostel.hostel_repository import RoomTypeRepository
from hostelhub.schemas.booking.booking import (
    BookingDisapprove,
    KickStudentRequest,
    LeaveHostelRequest,
)
from hostelhub.services.booking import BookingService
from tests.conftest import URGENT_DAY, booking_payload, make_manager, make_student, room_of


@pytest.fixture
def service(db, clock):
    return BookingService(db, clock)


def _approved_booking(service, student, manager, hostel, room_type=RoomType.SHARED, **overrides):
    created = service.create_booking(student.id, booking_payload(hostel.id, room_type, **overrides))
    assert created.is_success, created.message
    approved = service.approve_booking(manager.id, created.data.id)
    assert approved.is_success, approved.message
    return approved.data


class TestCreateBooking:
    def test_regular_booking_inside_window_is_pending(self, service, student, hostel):
        result = service.create_booking(student.id, booking_payload(hostel.id))

        assert result.is_success
        booking = result.data
        assert booking.status == BookingStatus.PENDING
        assert booking.booking_type == BookingType.REGULAR
        assert booking.amount == Decimal("15000")
        assert booking.urgent_leave_date is None
        assert booking.created_at == datetime(2025, 3, 5, 10, 0, 0)

    def test_pending_booking_does_not_take_a_room(self, db, service, student, hostel):
        service.create_booking(student.id, booking_payload(hostel.id))

        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 2

    def test_regular_booking_after_cutoff_is_rejected(self, service, clock, student, hostel):
        clock.set(URGENT_DAY)

        result = service.create_booking(student.id, booking_payload(hostel.id))

        assert not result.is_success
        assert result.error_code == ErrorCode.BOOKING_PERIOD_CLOSED
        assert "urgent booking" in result.message

    def test_urgent_booking_after_cutoff_uses_urgent_price(self, service, clock, student, hostel):
        clock.set(URGENT_DAY)

        result = service.create_booking(
            student.id, booking_payload(hostel.id, booking_type=BookingType.URGENT)
        )

        assert result.is_success, result.message
        assert result.data.amount == Decimal("9000")
        assert result.data.urgent_leave_date == datetime(2025, 4, 1)

    def test_urgent_booking_inside_regular_window_is_accepted(self, service, student, hostel):
        result = service.create_booking(
            student.id, booking_payload(hostel.id, booking_type=BookingType.URGENT)
        )

        assert result.is_success, result.message
        assert result.data.amount == Decimal("9000")
        assert result.data.urgent_leave_date == datetime(2025, 4, 1)

    def test_urgent_booking_needs_an_urgent_price(self, service, clock, student, hostel):
        clock.set(URGENT_DAY)

        result = service.create_booking(
            student.id,
            booking_payload(hostel.id, RoomType.PRIVATE, booking_type=BookingType.URGENT),
        )

        assert result.error_code == ErrorCode.BUSINESS_RULE_VIOLATION

    def test_room_type_not_offered(self, service, student, hostel):
        result = service.create_booking(student.id, booking_payload(hostel.id, RoomType.SHARED_FULLROOM))

        assert result.error_code == ErrorCode.BUSINESS_RULE_VIOLATION
        assert result.message == "Room type not available in this hostel"

    def test_unknown_hostel(self, service, student):
        result = service.create_booking(student.id, booking_payload("missing-hostel"))

        assert result.error_code == ErrorCode.NOT_FOUND

    def test_student_already_living_in_a_hostel(self, db, service, student, manager, hostel):
        _approved_booking(service, student, manager, hostel)

        result = service.create_booking(student.id, booking_payload(hostel.id, RoomType.PRIVATE))

        assert result.error_code == ErrorCode.BUSINESS_RULE_VIOLATION
        assert result.message == "Already booked in a hostel"


class TestApproveBooking:
    def test_approval_moves_student_in_and_takes_a_room(self, db, service, student, manager, hostel):
        booking = _approved_booking(service, student, manager, hostel)

        db.expire_all()
        assert booking.status == BookingStatus.APPROVED
        assert student.student_profile.current_hostel_id == hostel.id
        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 1

    def test_last_room_cannot_be_approved_twice(self, db, service, manager, hostel):
        first = make_student(db, "first@uni.edu.pk")
        second = make_student(db, "second@uni.edu.pk")
        first_booking = service.create_booking(first.id, booking_payload(hostel.id, RoomType.PRIVATE)).data
        second_booking = service.create_booking(second.id, booking_payload(hostel.id, RoomType.PRIVATE)).data

        assert service.approve_booking(manager.id, first_booking.id).is_success
        result = service.approve_booking(manager.id, second_booking.id)

        assert result.error_code == ErrorCode.ROOM_UNAVAILABLE
        db.expire_all()
        assert db.get(Booking, second_booking.id).status == BookingStatus.PENDING
        assert second.student_profile.current_hostel_id is None
        assert room_of(db, hostel.id, RoomType.PRIVATE).available_rooms == 0

    def test_only_pending_bookings_can_be_approved(self, service, student, manager, hostel):
        booking = _approved_booking(service, student, manager, hostel)

        result = service.approve_booking(manager.id, booking.id)

        assert result.error_code == ErrorCode.INVALID_STATE

    def test_other_manager_cannot_approve(self, db, service, student, hostel):
        intruder = make_manager(db, "intruder@hostels.com.pk")
        booking = service.create_booking(student.id, booking_payload(hostel.id)).data

        result = service.approve_booking(intruder.id, booking.id)

        assert result.error_code == ErrorCode.INSUFFICIENT_PERMISSIONS

    def test_expired_urgent_booking_cannot_be_approved(self, db, service, clock, student, manager, hostel):
        clock.set(URGENT_DAY)
        booking = service.create_booking(
            student.id, booking_payload(hostel.id, booking_type=BookingType.URGENT)
        ).data
        clock.set(datetime(2025, 4, 1, 9))

        result = service.approve_booking(manager.id, booking.id)

        assert result.error_code == ErrorCode.INVALID_STATE
        assert result.message == "Urgent booking period has already ended"
        db.expire_all()
        assert db.get(Booking, booking.id).status == BookingStatus.PENDING
        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 2

    def test_disapprove_records_refund(self, service, student, manager, hostel):
        booking = service.create_booking(student.id, booking_payload(hostel.id)).data

        result = service.disapprove_booking(
            manager.id,
            booking.id,
            BookingDisapprove(
                refund_image="https://res.cloudinary.com/demo/image/upload/refund.jpg",
                refund_date="2025-03-06",
                refund_time="12:30",
            ),
        )

        assert result.is_success
        assert result.data.status == BookingStatus.DISAPPROVED
        assert result.data.refund_image.endswith("refund.jpg")
        assert result.data.refund_date == "2025-03-06"


class TestLeavingAndKicking:
    def test_leave_records_review_and_returns_room(self, db, service, student, manager, hostel):
        booking = _approved_booking(service, student, manager, hostel)

        result = service.leave_hostel(
            student.id, LeaveHostelRequest(rating=4, review="Clean rooms", reason="Graduated")
        )

        assert result.is_success, result.message
        db.expire_all()
        left = db.get(Booking, booking.id)
        assert left.status == BookingStatus.LEFT
        assert left.kick_reason == KickReason.LEFT_HOSTEL
        assert left.leave_reason == "Graduated"
        assert left.review.rating == 4
        assert student.student_profile.current_hostel_id is None
        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 2
        assert hostel.average_rating == 4.0
        assert hostel.review_count == 1

    def test_second_leave_is_a_duplicate_review(self, service, student, manager, hostel):
        _approved_booking(service, student, manager, hostel)
        service.leave_hostel(student.id, LeaveHostelRequest(rating=5, review="Great"))

        result = service.leave_hostel(student.id, LeaveHostelRequest(rating=1, review="Again"))

        assert result.error_code == ErrorCode.DUPLICATE_REVIEW

    def test_leave_without_a_stay(self, service, student):
        result = service.leave_hostel(student.id, LeaveHostelRequest(rating=3, review="Never lived here"))

        assert result.error_code == ErrorCode.BUSINESS_RULE_VIOLATION
        assert result.message == "Not currently in a hostel"

    def test_kick_releases_room_and_writes_audit(self, db, service, student, manager, hostel):
        booking = _approved_booking(service, student, manager, hostel)

        result = service.kick_student(
            manager.id, booking.id, KickStudentRequest(kick_reason=KickReason.VIOLATED_RULES)
        )

        assert result.is_success
        db.expire_all()
        assert result.data.status == BookingStatus.LEFT
        assert result.data.kick_by_manager_id == manager.manager_profile.id
        assert student.student_profile.current_hostel_id is None
        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 2
        entry = db.query(AuditLog).filter(AuditLog.target_id == booking.id).one()
        assert entry.action == "STUDENT_KICKED_VIOLATED_RULES"
        assert entry.performed_by == manager.id

    def test_urgent_leave_and_kick_release_room(self, db, service, clock, manager, hostel):
        clock.set(URGENT_DAY)
        leaver = make_student(db, "leaver@uni.edu.pk")
        kicked = make_student(db, "kicked@uni.edu.pk")
        _approved_booking(service, leaver, manager, hostel, booking_type=BookingType.URGENT)
        booking = _approved_booking(service, kicked, manager, hostel, booking_type=BookingType.URGENT)
        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 0

        left = service.leave_hostel(leaver.id, LeaveHostelRequest(rating=4, review="Short but fine"))
        assert left.is_success, left.message
        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 1

        kick = service.kick_student(
            manager.id, booking.id, KickStudentRequest(kick_reason=KickReason.VIOLATED_RULES)
        )
        assert kick.is_success, kick.message
        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 2

    def test_failed_leave_changes_nothing(self, db, service, student, manager, hostel, monkeypatch):
        booking = _approved_booking(service, student, manager, hostel)

        def broken_rating(hostel_id):
            raise RuntimeError("rating update failed")

        monkeypatch.setattr(service.hostel_service, "apply_rating", broken_rating)

        result = service.leave_hostel(student.id, LeaveHostelRequest(rating=2, review="Cold showers"))

        assert result.error_code == ErrorCode.INTERNAL_ERROR
        db.expire_all()
        unchanged = db.get(Booking, booking.id)
        assert unchanged.status == BookingStatus.APPROVED
        assert unchanged.review is None
        assert student.student_profile.current_hostel_id == hostel.id
        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 1

    def test_release_never_exceeds_total(self, db, hostel):
        rooms = RoomTypeRepository(db)

        entry = rooms.release_room(hostel.id, RoomType.SHARED)
        db.commit()

        assert entry.available_rooms == entry.total_rooms == 2


class TestUrgentCompletion:
    def test_due_urgent_bookings_complete_on_first_of_month(self, db, service, clock, student, manager, hostel):
        clock.set(URGENT_DAY)
        booking = _approved_booking(
            service, student, manager, hostel, booking_type=BookingType.URGENT
        )

        early = service.complete_due_urgent_bookings(date(2025, 3, 31))
        assert early.data.completed == 0

        result = service.complete_due_urgent_bookings(date(2025, 4, 1))

        assert result.is_success
        assert result.data.completed == 1
        assert result.data.booking_ids == [booking.id]
        db.expire_all()
        completed = db.get(Booking, booking.id)
        assert completed.status == BookingStatus.COMPLETED
        assert completed.leave_date == datetime(2025, 4, 1)
        assert student.student_profile.current_hostel_id is None
        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 2


class TestReadAccess:
    def test_student_sees_only_own_booking(self, db, service, student, hostel):
        other = make_student(db, "other@uni.edu.pk")
        booking = service.create_booking(student.id, booking_payload(hostel.id)).data

        assert service.get_booking(booking.id, student).is_success
        assert service.get_booking(booking.id, other).error_code == ErrorCode.INSUFFICIENT_PERMISSIONS

    def test_hostel_bookings_filtered_by_status(self, db, service, student, manager, hostel):
        other = make_student(db, "other@uni.edu.pk")
        _approved_booking(service, student, manager, hostel)
        service.create_booking(other.id, booking_payload(hostel.id))

        pending = service.get_hostel_bookings(manager.id, hostel.id, BookingStatus.PENDING)
        everything = service.get_manager_bookings(manager.id)

        assert [b.student.email for b in pending.data] == ["other@uni.edu.pk"]
        assert len(everything.data) == 2

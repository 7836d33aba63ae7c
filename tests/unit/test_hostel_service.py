from decimal import Decimal

import pytest

from hostelhub.core.exceptions import ErrorCode
from hostelhub.models.base.enums import HostelFor, RoomType
from hostelhub.models.hostel.hostel import Hostel, HostelRoomType
from hostelhub.schemas.booking.booking import LeaveHostelRequest
from hostelhub.schemas.hostel.hostel import HostelSearchParams, HostelUpdate, RoomTypeConfig
from hostelhub.services.booking import BookingService
from hostelhub.services.hostel import HostelService
from tests.conftest import booking_payload, hostel_payload, make_manager, make_student, room_of


@pytest.fixture
def service(db, clock):
    return HostelService(db, clock)


@pytest.fixture
def bookings(db, clock):
    return BookingService(db, clock)


def _move_in(bookings, student, manager, hostel, room_type=RoomType.SHARED):
    booking = bookings.create_booking(student.id, booking_payload(hostel.id, room_type)).data
    assert bookings.approve_booking(manager.id, booking.id).is_success
    return booking


class TestCreateHostel:
    def test_room_types_start_fully_available(self, hostel):
        by_type = {room.type: room for room in hostel.room_types}

        assert by_type[RoomType.SHARED].available_rooms == 2
        assert by_type[RoomType.PRIVATE].available_rooms == 1
        assert hostel.is_active is True
        assert hostel.average_rating == 0.0
        assert hostel.facilities["wifi_enabled"] is True

    def test_unverified_manager_is_refused(self, db, service):
        pending = make_manager(db, "pending@hostels.com.pk", verified=False)

        result = service.create_hostel(pending.id, hostel_payload())

        assert result.error_code == ErrorCode.INSUFFICIENT_PERMISSIONS
        assert result.message == "Manager not verified"

    def test_duplicate_room_types_are_invalid(self):
        config = RoomTypeConfig(type=RoomType.SHARED, total_rooms=1, persons_in_room=2, price=Decimal("100"))

        with pytest.raises(ValueError):
            hostel_payload(room_types=[config, config])

    def test_discount_only_for_full_room(self):
        with pytest.raises(ValueError):
            RoomTypeConfig(
                type=RoomType.PRIVATE,
                total_rooms=1,
                persons_in_room=1,
                price=Decimal("100"),
                full_room_price_discounted=Decimal("90"),
            )


class TestUpdateHostel:
    def test_partial_update_keeps_other_fields(self, service, manager, hostel):
        result = service.update_hostel(manager.id, hostel.id, HostelUpdate(city="Islamabad"))

        assert result.is_success
        assert result.data.city == "Islamabad"
        assert result.data.hostel_name == "Green View Hostel"

    def test_resize_keeps_occupied_rooms_occupied(self, db, service, bookings, student, manager, hostel):
        _move_in(bookings, student, manager, hostel)
        configs = [
            RoomTypeConfig(type=RoomType.SHARED, total_rooms=5, persons_in_room=3, price=Decimal("16000")),
            RoomTypeConfig(type=RoomType.PRIVATE, total_rooms=1, persons_in_room=1, price=Decimal("25000")),
        ]

        result = service.update_hostel(manager.id, hostel.id, HostelUpdate(room_types=configs))

        assert result.is_success, result.message
        shared = room_of(db, hostel.id, RoomType.SHARED)
        assert shared.total_rooms == 5
        assert shared.available_rooms == 4
        assert shared.price == Decimal("16000")

    def test_occupied_room_type_cannot_be_removed(self, db, service, bookings, student, manager, hostel):
        _move_in(bookings, student, manager, hostel, RoomType.PRIVATE)
        configs = [RoomTypeConfig(type=RoomType.SHARED, total_rooms=2, persons_in_room=3, price=Decimal("15000"))]

        result = service.update_hostel(manager.id, hostel.id, HostelUpdate(room_types=configs))

        assert result.error_code == ErrorCode.BUSINESS_RULE_VIOLATION
        assert "PRIVATE" in result.message
        assert room_of(db, hostel.id, RoomType.PRIVATE).total_rooms == 1

    def test_empty_room_type_is_removed(self, db, service, manager, hostel):
        configs = [RoomTypeConfig(type=RoomType.SHARED, total_rooms=2, persons_in_room=3, price=Decimal("15000"))]

        result = service.update_hostel(manager.id, hostel.id, HostelUpdate(room_types=configs))

        assert result.is_success
        db.expire_all()
        types = {row.type for row in db.query(HostelRoomType).filter(HostelRoomType.hostel_id == hostel.id)}
        assert types == {RoomType.SHARED}

    def test_other_manager_cannot_update(self, db, service, hostel):
        intruder = make_manager(db, "intruder@hostels.com.pk")

        result = service.update_hostel(intruder.id, hostel.id, HostelUpdate(city="Karachi"))

        assert result.error_code == ErrorCode.INSUFFICIENT_PERMISSIONS


class TestDeleteHostel:
    def test_refused_while_students_stay(self, service, bookings, student, manager, hostel):
        _move_in(bookings, student, manager, hostel)

        result = service.delete_hostel(manager.id, hostel.id)

        assert result.error_code == ErrorCode.BUSINESS_RULE_VIOLATION

    def test_delete_removes_history(self, db, service, bookings, student, manager, hostel):
        _move_in(bookings, student, manager, hostel)
        bookings.leave_hostel(student.id, LeaveHostelRequest(rating=5, review="Lovely"))
        hostel_id = hostel.id

        result = service.delete_hostel(manager.id, hostel_id)

        assert result.is_success
        assert db.get(Hostel, hostel_id) is None
        assert db.query(HostelRoomType).filter(HostelRoomType.hostel_id == hostel_id).count() == 0


class TestReads:
    def test_search_filters(self, db, service, manager, hostel):
        service.create_hostel(
            manager.id,
            hostel_payload(hostel_name="Rose Residence", city="Karachi", hostel_for=HostelFor.GIRLS),
        )

        by_city = service.search_hostels(HostelSearchParams(city="lahore")).data
        by_location = service.search_hostels(HostelSearchParams(nearby_location="canal bank")).data
        private = service.search_hostels(HostelSearchParams(room_type=RoomType.PRIVATE)).data
        by_price = service.search_hostels(HostelSearchParams(min_price=Decimal("30000"))).data
        girls = service.search_hostels(HostelSearchParams(hostel_for=HostelFor.GIRLS)).data

        assert [h.hostel_name for h in by_city] == ["Green View Hostel"]
        assert len(by_location) == 2
        assert len(private) == 2
        assert by_price == []
        assert [h.hostel_name for h in girls] == ["Rose Residence"]

    def test_inactive_hostels_are_hidden_from_search(self, service, manager, hostel):
        service.update_hostel(manager.id, hostel.id, HostelUpdate(is_active=False))

        assert service.search_hostels(HostelSearchParams()).data == []

    def test_detail_includes_reviews(self, service, bookings, student, manager, hostel):
        _move_in(bookings, student, manager, hostel)
        bookings.leave_hostel(student.id, LeaveHostelRequest(rating=3, review="Okay food"))

        detail = service.get_hostel(hostel.id).data

        assert detail.review_count == 1
        assert detail.average_rating == 3.0
        assert [review.comment for review in detail.reviews] == ["Okay food"]
        assert detail.reviews[0].reviewer_email == "ali@uni.edu.pk"

    def test_unknown_hostel(self, service):
        assert service.get_hostel("missing").error_code == ErrorCode.NOT_FOUND

    def test_rating_is_rounded_average(self, db, service, bookings, manager, hostel):
        for index, rating in enumerate((5, 4, 4)):
            resident = make_student(db, f"resident{index}@uni.edu.pk")
            _move_in(bookings, resident, manager, hostel)
            bookings.leave_hostel(resident.id, LeaveHostelRequest(rating=rating, review="Stayed here"))

        refreshed = service.recalculate_rating(hostel.id).data

        assert refreshed.review_count == 3
        assert refreshed.average_rating == 4.3

    def test_random_reviews_carry_hostel(self, service, bookings, student, manager, hostel):
        _move_in(bookings, student, manager, hostel)
        bookings.leave_hostel(student.id, LeaveHostelRequest(rating=5, review="Best in town"))

        reviews = service.get_random_reviews(limit=4).data

        assert len(reviews) == 1
        assert reviews[0].hostel.hostel_name == "Green View Hostel"

    def test_students_lists_current_residents(self, service, bookings, student, manager, hostel):
        _move_in(bookings, student, manager, hostel)

        residents = service.get_hostel_students(manager.id, hostel.id).data

        assert [r.email for r in residents] == ["ali@uni.edu.pk"]
        assert residents[0].room_type == RoomType.SHARED

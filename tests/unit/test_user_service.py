import pytest

from hostelhub.core.exceptions import ErrorCode
from hostelhub.core.security import verify_access_token
from hostelhub.models.audit.audit_log import AuditLog
from hostelhub.models.base.enums import RoomType, UserRole
from hostelhub.models.booking.booking import Booking
from hostelhub.models.hostel.hostel import Hostel
from hostelhub.models.user.user import StudentProfile, User
from hostelhub.schemas.auth.auth import LoginRequest, RegisterRequest
from hostelhub.schemas.booking.booking import LeaveHostelRequest
from hostelhub.schemas.user.user import ManagerProfileUpdate, StudentSelfVerifyRequest
from hostelhub.services.auth import AuthService
from hostelhub.services.booking import BookingService
from hostelhub.services.user import UserService
from tests.conftest import DEFAULT_PASSWORD, booking_payload, make_student, make_user, room_of


@pytest.fixture
def service(db, clock):
    return UserService(db, clock)


@pytest.fixture
def auth(db, clock):
    return AuthService(db, clock)


def _move_in(db, clock, student, manager, hostel, room_type=RoomType.SHARED):
    bookings = BookingService(db, clock)
    booking = bookings.create_booking(student.id, booking_payload(hostel.id, room_type)).data
    assert bookings.approve_booking(manager.id, booking.id).is_success
    return bookings


class TestAuth:
    def test_register_creates_profile_and_token(self, db, auth):
        result = auth.register(RegisterRequest(email="Sara@Uni.edu.pk", password="s3cretpass", role=UserRole.STUDENT))

        assert result.is_success
        token = result.data
        assert token.user.email == "sara@uni.edu.pk"
        assert verify_access_token(token.access_token)["sub"] == token.user.id
        profile = db.query(StudentProfile).filter(StudentProfile.user_id == token.user.id).one()
        assert profile.self_verified is False

    def test_email_is_unique(self, auth, student):
        result = auth.register(RegisterRequest(email="ali@uni.edu.pk", password="s3cretpass", role=UserRole.MANAGER))

        assert result.error_code == ErrorCode.CONFLICT

    def test_admin_role_cannot_self_register(self):
        with pytest.raises(ValueError):
            RegisterRequest(email="boss@uni.edu.pk", password="s3cretpass", role=UserRole.ADMIN)

    def test_login(self, auth, student):
        ok = auth.login(LoginRequest(email="ALI@uni.edu.pk", password=DEFAULT_PASSWORD))
        wrong = auth.login(LoginRequest(email="ali@uni.edu.pk", password="not-the-password"))

        assert ok.is_success
        assert ok.data.user.role == UserRole.STUDENT
        assert wrong.error_code == ErrorCode.UNAUTHORIZED
        assert wrong.message == "Invalid email or password"


class TestProfiles:
    def test_self_verification_happens_once(self, db, service):
        fresh = make_user(db, "fresh@uni.edu.pk", UserRole.STUDENT)
        request = StudentSelfVerifyRequest(
            full_name="Hina Malik",
            phone_number="03211234567",
            institute="FAST",
            city="Lahore",
        )

        first = service.self_verify_student(fresh.id, request)
        second = service.self_verify_student(fresh.id, request)

        assert first.data.self_verified is True
        assert first.data.full_name == "Hina Malik"
        assert second.error_code == ErrorCode.BUSINESS_RULE_VIOLATION

    def test_manager_profile_partial_update(self, service, manager):
        result = service.update_manager_profile(manager.id, ManagerProfileUpdate(business_name="Green Stays"))

        assert result.data.business_name == "Green Stays"
        assert result.data.full_name == "Kamran Shah"

    def test_missing_profile(self, service, manager):
        assert service.get_student_profile(manager.id).error_code == ErrorCode.NOT_FOUND


class TestTermination:
    def test_admin_terminates_user_with_audit(self, db, service, admin, student):
        result = service.terminate_user(student.id, admin.id)

        assert result.data.is_terminated is True
        entry = db.query(AuditLog).filter(AuditLog.target_id == student.id).one()
        assert entry.action == "TERMINATE_USER"
        assert entry.performed_by == admin.id

    def test_admins_cannot_be_terminated(self, db, service, admin):
        other_admin = make_user(db, "second.admin@hostelhub.com.pk", UserRole.ADMIN)

        assert service.terminate_user(other_admin.id, admin.id).error_code == ErrorCode.INSUFFICIENT_PERMISSIONS

    def test_users_filtered_by_role(self, service, admin, student, manager):
        students = service.get_all_users(UserRole.STUDENT).data

        assert [user.email for user in students] == ["ali@uni.edu.pk"]
        assert len(service.get_all_users().data) == 3


class TestDeleteAccount:
    def test_student_deletion_restores_room_and_rating(self, db, clock, service, student, manager, hostel):
        bookings = _move_in(db, clock, student, manager, hostel)
        bookings.leave_hostel(student.id, LeaveHostelRequest(rating=2, review="Noisy"))
        returning = make_student(db, "returning@uni.edu.pk")
        _move_in(db, clock, returning, manager, hostel)
        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 1

        assert service.delete_my_account(student.id).is_success
        assert service.delete_my_account(returning.id).is_success

        assert room_of(db, hostel.id, RoomType.SHARED).available_rooms == 2
        assert db.query(Booking).count() == 0
        refreshed = db.get(Hostel, hostel.id)
        assert refreshed.review_count == 0
        assert refreshed.average_rating == 0.0
        assert db.query(User).filter(User.role == UserRole.STUDENT).count() == 0

    def test_manager_deletion_moves_students_out(self, db, clock, service, student, manager, hostel):
        _move_in(db, clock, student, manager, hostel)
        hostel_id = hostel.id

        assert service.delete_my_account(manager.id).is_success

        assert db.get(Hostel, hostel_id) is None
        profile = db.query(StudentProfile).filter(StudentProfile.user_id == student.id).one()
        assert profile.current_hostel_id is None

    def test_admin_cannot_delete_self(self, service, admin):
        assert service.delete_my_account(admin.id).error_code == ErrorCode.INSUFFICIENT_PERMISSIONS

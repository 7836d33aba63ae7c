"""
User service: role profiles, admin account moderation and self-service
account deletion.
"""

from typing import List, Optional, Set

from sqlalchemy import or_
from sqlalchemy.orm import Session

from hostelhub.core.exceptions import (
    AuthorizationError,
    BusinessRuleError,
    UserNotFoundError,
)
from hostelhub.models.base.enums import UserRole
from hostelhub.models.booking.booking import Booking
from hostelhub.models.fee.monthly_admin_fee import MonthlyAdminFee
from hostelhub.models.hostel.hostel import Hostel, HostelRoomType
from hostelhub.models.report.report import Report
from hostelhub.models.reservation.reservation import Reservation
from hostelhub.models.review.review import Review
from hostelhub.models.user.user import ManagerProfile, StudentProfile, User
from hostelhub.models.verification.manager_verification import ManagerVerification
from hostelhub.repositories.audit.audit_repository import AuditLogRepository
from hostelhub.repositories.booking.booking_repository import BookingRepository
from hostelhub.repositories.chat.chat_repository import ConversationRepository, MessageRepository
from hostelhub.repositories.fee.fee_repository import MonthlyFeeRepository
from hostelhub.repositories.hostel.hostel_repository import HostelRepository, RoomTypeRepository
from hostelhub.repositories.report.report_repository import ReportRepository
from hostelhub.repositories.reservation.reservation_repository import ReservationRepository
from hostelhub.repositories.review.review_repository import ReviewRepository
from hostelhub.repositories.user.user_repository import (
    ManagerProfileRepository,
    StudentProfileRepository,
    UserRepository,
)
from hostelhub.repositories.verification.verification_repository import VerificationRepository
from hostelhub.schemas.user.user import ManagerProfileUpdate, StudentSelfVerifyRequest
from hostelhub.services.base import BaseService, ProfileLookupMixin, ServiceResult
from hostelhub.services.hostel.hostel_service import HostelService
from hostelhub.utils.datetime_utils import Clock

USER_TARGET_TYPE = "User"


class UserService(ProfileLookupMixin, BaseService):

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.users = UserRepository(db_session)
        self.students = StudentProfileRepository(db_session)
        self.managers = ManagerProfileRepository(db_session)
        self.hostels = HostelRepository(db_session)
        self.room_types = RoomTypeRepository(db_session)
        self.bookings = BookingRepository(db_session)
        self.reservations = ReservationRepository(db_session)
        self.reviews = ReviewRepository(db_session)
        self.reports = ReportRepository(db_session)
        self.fees = MonthlyFeeRepository(db_session)
        self.verifications = VerificationRepository(db_session)
        self.conversations = ConversationRepository(db_session)
        self.messages = MessageRepository(db_session)
        self.audit = AuditLogRepository(db_session)
        self.hostel_service = HostelService(db_session, clock)

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    def self_verify_student(self, user_id: str, data: StudentSelfVerifyRequest) -> ServiceResult[StudentProfile]:
        """Record the student's identity details. Allowed once."""
        try:
            profile = self._student_profile(user_id)
            if profile.self_verified:
                raise BusinessRuleError("Already verified")

            with self.transaction():
                self.students.update(
                    profile,
                    {
                        "full_name": data.full_name,
                        "phone_number": data.phone_number,
                        "cnic": data.cnic,
                        "institute": data.institute,
                        "city": data.city,
                        "self_verified": True,
                    },
                )

            self._logger.info(f"Student profile {profile.id} self-verified")
            return ServiceResult.success(profile, message="Self verification completed")
        except Exception as e:
            return self._handle_exception(e, "self verify student", user_id)

    def get_student_profile(self, user_id: str) -> ServiceResult[StudentProfile]:
        try:
            return ServiceResult.success(self._student_profile(user_id))
        except Exception as e:
            return self._handle_exception(e, "get student profile", user_id)

    def get_manager_profile(self, user_id: str) -> ServiceResult[ManagerProfile]:
        try:
            return ServiceResult.success(self._manager_profile(user_id))
        except Exception as e:
            return self._handle_exception(e, "get manager profile", user_id)

    def update_manager_profile(self, user_id: str, data: ManagerProfileUpdate) -> ServiceResult[ManagerProfile]:
        try:
            profile = self._manager_profile(user_id)
            updates = {
                field: getattr(data, field)
                for field in data.model_fields_set
                if getattr(data, field) is not None
            }
            with self.transaction():
                self.managers.update(profile, updates)

            self._logger.info(f"Manager profile {profile.id} updated", extra={"fields": sorted(updates)})
            return ServiceResult.success(profile, message="Profile updated successfully")
        except Exception as e:
            return self._handle_exception(e, "update manager profile", user_id)

    # -------------------------------------------------------------------------
    # Admin moderation
    # -------------------------------------------------------------------------

    def get_all_users(self, role: Optional[UserRole] = None) -> ServiceResult[List[User]]:
        try:
            return ServiceResult.success(self.users.find_by_role(role))
        except Exception as e:
            return self._handle_exception(e, "get all users")

    def terminate_user(self, target_user_id: str, admin_user_id: str) -> ServiceResult[User]:
        try:
            user = self.users.find_by_id(target_user_id)
            if user is None:
                raise UserNotFoundError(target_user_id)
            if user.role == UserRole.ADMIN:
                raise AuthorizationError("Cannot terminate an admin account")

            with self.transaction():
                self.users.update(user, {"is_terminated": True})
                self.audit.log(
                    "TERMINATE_USER",
                    admin_user_id,
                    USER_TARGET_TYPE,
                    user.id,
                    {"role": user.role.value},
                )

            self._logger.info(f"User {user.id} terminated", extra={"admin_id": admin_user_id})
            return ServiceResult.success(user, message="User terminated")
        except Exception as e:
            return self._handle_exception(e, "terminate user", target_user_id)

    # -------------------------------------------------------------------------
    # Account deletion
    # -------------------------------------------------------------------------

    def delete_my_account(self, user_id: str) -> ServiceResult[bool]:
        """
        Permanently delete the user and everything that belongs to them.

        A student's occupied rooms are given back first. A manager's
        hostels go with the account, and students living there are moved out.
        """
        try:
            user = self.users.find_by_id(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            if user.role == UserRole.ADMIN:
                raise AuthorizationError("Admin accounts cannot be deleted")

            role = user.role
            with self.transaction():
                self.audit.delete_involving(user.id)
                conversation_ids = self.conversations.find_ids_for_user(user.id)
                self.messages.delete_involving(user.id, conversation_ids)
                self.conversations.delete_for_user(user.id)

                if role == UserRole.STUDENT:
                    self._delete_student_data(user.id)
                elif role == UserRole.MANAGER:
                    self._delete_manager_data(user.id)

                self.users.delete_where(User.id == user.id)
                self.db.expire_all()

            self._logger.info(f"User {user_id} deleted their account", extra={"role": role.value})
            return ServiceResult.success(True, message="Account deleted successfully")
        except Exception as e:
            return self._handle_exception(e, "delete account", user_id)

    def _delete_student_data(self, user_id: str) -> None:
        profile = self.students.find_by_user_id(user_id)
        if profile is None:
            return

        for booking in self.bookings.find_approved_by_student(profile.id):
            self.room_types.release_room(booking.hostel_id, booking.room_type)

        reviewed_hostels: Set[str] = {
            review.hostel_id for review in self.reviews.find_by_criteria({"student_id": profile.id})
        }
        self.reviews.delete_where(Review.student_id == profile.id)
        self.reports.delete_where(Report.student_id == profile.id)
        self.bookings.delete_where(Booking.student_id == profile.id)
        self.reservations.delete_where(Reservation.student_id == profile.id)
        self.students.delete_where(StudentProfile.id == profile.id)

        for hostel_id in reviewed_hostels:
            self.hostel_service.apply_rating(hostel_id)

    def _delete_manager_data(self, user_id: str) -> None:
        profile = self.managers.find_by_user_id(user_id)
        if profile is None:
            return

        hostel_ids = self.hostels.find_ids_by_manager(profile.id)
        if hostel_ids:
            self.reviews.delete_where(Review.hostel_id.in_(hostel_ids))
            self.reports.delete_where(
                or_(Report.manager_id == profile.id, Report.hostel_id.in_(hostel_ids))
            )
            self.students.clear_current_hostel(hostel_ids)
            self.bookings.delete_where(Booking.hostel_id.in_(hostel_ids))
            self.reservations.delete_where(Reservation.hostel_id.in_(hostel_ids))
            self.room_types.delete_where(HostelRoomType.hostel_id.in_(hostel_ids))
        else:
            self.reports.delete_where(Report.manager_id == profile.id)

        self.fees.delete_where(MonthlyAdminFee.manager_id == profile.id)
        self.verifications.delete_where(ManagerVerification.manager_id == profile.id)
        self.hostels.delete_where(Hostel.manager_id == profile.id)
        self.managers.delete_where(ManagerProfile.id == profile.id)

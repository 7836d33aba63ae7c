"""
Hostel service: hostel CRUD for verified managers, public search and
details, resident listings and hostel ratings.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostelhub.config.settings import settings
from hostelhub.core.exceptions import AuthorizationError, BusinessRuleError, HostelNotFoundError
from hostelhub.models.booking.booking import Booking
from hostelhub.models.base.enums import BookingStatus
from hostelhub.models.fee.monthly_admin_fee import MonthlyAdminFee
from hostelhub.models.hostel.hostel import Hostel, HostelRoomType
from hostelhub.models.report.report import Report
from hostelhub.models.reservation.reservation import Reservation
from hostelhub.models.review.review import Review
from hostelhub.repositories.booking.booking_repository import BookingRepository
from hostelhub.repositories.fee.fee_repository import MonthlyFeeRepository
from hostelhub.repositories.hostel.hostel_repository import (
    HostelRepository,
    HostelSearchCriteria,
    RoomTypeRepository,
)
from hostelhub.repositories.report.report_repository import ReportRepository
from hostelhub.repositories.reservation.reservation_repository import ReservationRepository
from hostelhub.repositories.review.review_repository import ReviewRepository
from hostelhub.repositories.user.user_repository import StudentProfileRepository
from hostelhub.schemas.hostel.hostel import (
    HostelCreate,
    HostelDetailResponse,
    HostelSearchParams,
    HostelStudentResponse,
    HostelUpdate,
    RandomReviewResponse,
    ReviewResponse,
    RoomTypeConfig,
)
from hostelhub.services.base import BaseService, ProfileLookupMixin, ServiceResult
from hostelhub.utils.datetime_utils import Clock

# Columns a partial update may set to null
NULLABLE_UPDATE_FIELDS = {"rules"}


class HostelService(ProfileLookupMixin, BaseService):
    """
    Manage hostels and their room inventory configuration.

    Room availability itself only moves through the booking lifecycle;
    this service sets it when room types are created or resized.
    """

    def __init__(self, db_session: Session, clock: Optional[Clock] = None):
        super().__init__(db_session, clock)
        self.hostels = HostelRepository(db_session)
        self.room_types = RoomTypeRepository(db_session)
        self.bookings = BookingRepository(db_session)
        self.reviews = ReviewRepository(db_session)
        self.reports = ReportRepository(db_session)
        self.reservations = ReservationRepository(db_session)
        self.fees = MonthlyFeeRepository(db_session)
        self.students = StudentProfileRepository(db_session)

    # -------------------------------------------------------------------------
    # Manager operations
    # -------------------------------------------------------------------------

    def create_hostel(self, user_id: str, data: HostelCreate) -> ServiceResult[Hostel]:
        """
        Create a hostel for a verified manager.

        Every room type starts with all of its rooms available.
        """
        try:
            manager = self._manager_profile(user_id)
            if not manager.verified:
                raise AuthorizationError("Manager not verified")

            hostel = Hostel(
                manager_id=manager.id,
                hostel_name=data.hostel_name,
                city=data.city,
                address=data.address,
                nearby_locations=list(data.nearby_locations),
                hostel_for=data.hostel_for,
                facilities=data.facilities.model_dump(mode="json"),
                room_images=[str(url) for url in data.room_images],
                rules=data.rules,
                seo_keywords=list(data.seo_keywords),
                room_types=[self._build_room_type(config) for config in data.room_types],
            )

            with self.transaction():
                self.hostels.create(hostel)

            self._logger.info(
                f"Hostel {hostel.id} created",
                extra={"manager_id": manager.id, "room_types": len(data.room_types)},
            )
            return ServiceResult.success(
                self.hostels.find_with_details(hostel.id),
                message="Hostel created successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "create hostel", user_id)

    def update_hostel(self, user_id: str, hostel_id: str, data: HostelUpdate) -> ServiceResult[Hostel]:
        """
        Apply a partial update.

        When ``room_types`` is supplied it replaces the hostel's room
        configuration; resized types keep their occupied rooms occupied.
        """
        try:
            manager = self._manager_profile(user_id)
            hostel = self._owned_hostel(manager, hostel_id)

            updates = {}
            for field in data.model_fields_set - {"room_types", "facilities", "room_images"}:
                value = getattr(data, field)
                if value is None and field not in NULLABLE_UPDATE_FIELDS:
                    continue
                updates[field] = value
            if data.facilities is not None:
                updates["facilities"] = data.facilities.model_dump(mode="json")
            if data.room_images is not None:
                updates["room_images"] = [str(url) for url in data.room_images]

            with self.transaction():
                self.hostels.update(hostel, updates)
                if data.room_types is not None:
                    self._sync_room_types(hostel, data.room_types)
                    self.db.flush()

            self._logger.info(
                f"Hostel {hostel.id} updated",
                extra={"fields": sorted(data.model_fields_set)},
            )
            self.db.refresh(hostel)
            return ServiceResult.success(
                self.hostels.find_with_details(hostel.id),
                message="Hostel updated successfully",
            )
        except Exception as e:
            return self._handle_exception(e, "update hostel", hostel_id)

    def delete_hostel(self, user_id: str, hostel_id: str) -> ServiceResult[bool]:
        """
        Delete a hostel with its reviews, reports, bookings, reservations
        and fee records. Refused while students are staying there.
        """
        try:
            manager = self._manager_profile(user_id)
            hostel = self._owned_hostel(manager, hostel_id)
            if self.bookings.has_approved(hostel.id):
                raise BusinessRuleError("Cannot delete a hostel while students are staying in it")

            with self.transaction():
                self.reviews.delete_where(Review.hostel_id == hostel.id)
                self.reports.delete_where(Report.hostel_id == hostel.id)
                self.students.clear_current_hostel([hostel.id])
                self.bookings.delete_where(Booking.hostel_id == hostel.id)
                self.reservations.delete_where(Reservation.hostel_id == hostel.id)
                self.fees.delete_where(MonthlyAdminFee.hostel_id == hostel.id)
                self.room_types.delete_where(HostelRoomType.hostel_id == hostel.id)
                self.hostels.delete_where(Hostel.id == hostel.id)
                self.db.expire_all()

            self._logger.info(f"Hostel {hostel_id} deleted", extra={"manager_id": manager.id})
            return ServiceResult.success(True, message="Hostel deleted successfully")
        except Exception as e:
            return self._handle_exception(e, "delete hostel", hostel_id)

    def get_my_hostels(self, user_id: str) -> ServiceResult[List[Hostel]]:
        try:
            manager = self._manager_profile(user_id)
            return ServiceResult.success(self.hostels.find_by_manager(manager.id))
        except Exception as e:
            return self._handle_exception(e, "get manager hostels", user_id)

    def get_hostel_students(self, user_id: str, hostel_id: str) -> ServiceResult[List[HostelStudentResponse]]:
        """Students currently staying in one of the manager's hostels."""
        try:
            manager = self._manager_profile(user_id)
            hostel = self._owned_hostel(manager, hostel_id)
            bookings = self.bookings.find_by_hostels([hostel.id], BookingStatus.APPROVED)

            residents = [
                HostelStudentResponse(
                    booking_id=booking.id,
                    student_id=booking.student_id,
                    email=booking.student.email,
                    full_name=booking.student.full_name,
                    phone_number=booking.student.phone_number,
                    institute=booking.student.institute,
                    room_type=booking.room_type,
                    booking_type=booking.booking_type,
                    amount=float(booking.amount),
                    approved_since=booking.updated_at,
                )
                for booking in bookings
            ]
            return ServiceResult.success(residents)
        except Exception as e:
            return self._handle_exception(e, "get hostel students", hostel_id)

    # -------------------------------------------------------------------------
    # Public and admin reads
    # -------------------------------------------------------------------------

    def search_hostels(self, params: HostelSearchParams) -> ServiceResult[List[Hostel]]:
        try:
            criteria = HostelSearchCriteria(
                city=params.city,
                nearby_location=params.nearby_location,
                room_type=params.room_type,
                hostel_for=params.hostel_for,
                min_price=params.min_price,
                max_price=params.max_price,
            )
            return ServiceResult.success(self.hostels.search(criteria))
        except Exception as e:
            return self._handle_exception(e, "search hostels")

    def get_hostel(self, hostel_id: str) -> ServiceResult[HostelDetailResponse]:
        """Hostel details with its latest reviews."""
        try:
            hostel = self.hostels.find_with_details(hostel_id)
            if hostel is None:
                raise HostelNotFoundError(hostel_id)

            reviews = self.reviews.find_latest_for_hostel(hostel.id, settings.HOSTEL_DETAIL_REVIEWS_LIMIT)
            detail = HostelDetailResponse.model_validate(hostel)
            detail.reviews = [ReviewResponse.model_validate(review) for review in reviews]
            return ServiceResult.success(detail)
        except Exception as e:
            return self._handle_exception(e, "get hostel", hostel_id)

    def get_all_hostels(self) -> ServiceResult[List[Hostel]]:
        try:
            return ServiceResult.success(self.hostels.find_all_with_details())
        except Exception as e:
            return self._handle_exception(e, "get all hostels")

    def get_random_reviews(self, limit: Optional[int] = None) -> ServiceResult[List[RandomReviewResponse]]:
        try:
            reviews = self.reviews.find_random(limit or settings.RANDOM_REVIEWS_LIMIT)
            return ServiceResult.success(
                [RandomReviewResponse.model_validate(review) for review in reviews]
            )
        except Exception as e:
            return self._handle_exception(e, "get random reviews")

    # -------------------------------------------------------------------------
    # Ratings
    # -------------------------------------------------------------------------

    def recalculate_rating(self, hostel_id: str) -> ServiceResult[Hostel]:
        try:
            with self.transaction():
                self.apply_rating(hostel_id)
            return ServiceResult.success(self.hostels.find_with_details(hostel_id))
        except Exception as e:
            return self._handle_exception(e, "recalculate hostel rating", hostel_id)

    def apply_rating(self, hostel_id: str) -> None:
        """
        Recompute the average rating and review count from the hostel's
        reviews inside the caller's transaction.
        """
        self.db.flush()
        average, count = self.reviews.rating_stats(hostel_id)
        self.hostels.update_rating(hostel_id, round(average, 1), count)
        self._logger.debug(
            f"Hostel {hostel_id} rating recalculated",
            extra={"average_rating": round(average, 1), "review_count": count},
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _build_room_type(config: RoomTypeConfig) -> HostelRoomType:
        return HostelRoomType(
            type=config.type,
            total_rooms=config.total_rooms,
            available_rooms=config.total_rooms,
            persons_in_room=config.persons_in_room,
            price=config.price,
            full_room_price_discounted=config.full_room_price_discounted,
            urgent_booking_price=config.urgent_booking_price,
        )

    def _sync_room_types(self, hostel: Hostel, configs: List[RoomTypeConfig]) -> None:
        wanted = {config.type: config for config in configs}

        for entry in list(hostel.room_types):
            if entry.type in wanted:
                continue
            if self.bookings.has_approved(hostel.id, entry.type):
                raise BusinessRuleError(
                    f"Cannot remove {entry.type.value} rooms while students are staying in them",
                    details={"room_type": entry.type.value},
                )
            hostel.room_types.remove(entry)

        existing = {entry.type: entry for entry in hostel.room_types}
        for room_type, config in wanted.items():
            entry = existing.get(room_type)
            if entry is None:
                hostel.room_types.append(self._build_room_type(config))
                continue

            # Occupied rooms stay occupied when the room count changes
            available = entry.available_rooms + (config.total_rooms - entry.total_rooms)
            entry.available_rooms = max(0, min(config.total_rooms, available))
            entry.total_rooms = config.total_rooms
            entry.persons_in_room = config.persons_in_room
            entry.price = config.price
            entry.full_room_price_discounted = config.full_room_price_discounted
            entry.urgent_booking_price = config.urgent_booking_price

"""
Hostel and room inventory repositories.

Availability changes are single conditional UPDATE statements, so two
concurrent approvals can never both take the last room of a type.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import and_, case, update
from sqlalchemy.orm import Session, joinedload, selectinload

from hostelhub.core.exceptions import RoomUnavailableError
from hostelhub.core.logging import get_logger
from hostelhub.models.base.enums import HostelFor, RoomType
from hostelhub.models.hostel.hostel import Hostel, HostelRoomType
from hostelhub.models.user.user import ManagerProfile
from hostelhub.repositories.base.base_repository import BaseRepository

logger = get_logger(__name__)


class HostelSearchCriteria:
    """Search criteria for public hostel listings."""

    def __init__(
        self,
        city: Optional[str] = None,
        nearby_location: Optional[str] = None,
        room_type: Optional[RoomType] = None,
        hostel_for: Optional[HostelFor] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
    ):
        self.city = city
        self.nearby_location = nearby_location
        self.room_type = room_type
        self.hostel_for = hostel_for
        self.min_price = min_price
        self.max_price = max_price


class HostelRepository(BaseRepository[Hostel]):

    def __init__(self, db: Session):
        super().__init__(Hostel, db)

    def _with_details(self):
        return self.db.query(Hostel).options(
            selectinload(Hostel.room_types),
            joinedload(Hostel.manager).joinedload(ManagerProfile.user),
        )

    def find_with_details(self, hostel_id: str) -> Optional[Hostel]:
        return self._with_details().filter(Hostel.id == hostel_id).first()

    def find_owned(self, hostel_id: str, manager_id: str) -> Optional[Hostel]:
        return (
            self._with_details()
            .filter(Hostel.id == hostel_id, Hostel.manager_id == manager_id)
            .first()
        )

    def find_by_manager(self, manager_id: str) -> List[Hostel]:
        return (
            self._with_details()
            .filter(Hostel.manager_id == manager_id)
            .order_by(Hostel.created_at.desc())
            .all()
        )

    def find_ids_by_manager(self, manager_id: str) -> List[str]:
        rows = self.db.query(Hostel.id).filter(Hostel.manager_id == manager_id).all()
        return [row.id for row in rows]

    def find_all_with_details(self) -> List[Hostel]:
        return self._with_details().order_by(Hostel.created_at.desc()).all()

    def search(self, criteria: HostelSearchCriteria) -> List[Hostel]:
        """
        Active hostels matching ``criteria``, best rated first.

        A room type filter only matches hostels with a free room of that
        type; a price range matches when any room type's price falls in it.
        """
        query = self._with_details().filter(Hostel.is_active.is_(True))

        if criteria.city:
            query = query.filter(Hostel.city.ilike(f"%{criteria.city.strip()}%"))
        if criteria.hostel_for:
            query = query.filter(Hostel.hostel_for == criteria.hostel_for)
        if criteria.room_type:
            query = query.filter(
                Hostel.room_types.any(
                    and_(
                        HostelRoomType.type == criteria.room_type,
                        HostelRoomType.available_rooms > 0,
                    )
                )
            )
        if criteria.min_price is not None or criteria.max_price is not None:
            price_conditions = []
            if criteria.min_price is not None:
                price_conditions.append(HostelRoomType.price >= criteria.min_price)
            if criteria.max_price is not None:
                price_conditions.append(HostelRoomType.price <= criteria.max_price)
            query = query.filter(Hostel.room_types.any(and_(*price_conditions)))

        hostels = query.order_by(Hostel.average_rating.desc(), Hostel.created_at.desc()).all()

        if criteria.nearby_location:
            # Locations are a JSON list, matched exactly ignoring case
            wanted = criteria.nearby_location.strip().lower()
            hostels = [
                hostel for hostel in hostels
                if any(location.strip().lower() == wanted for location in hostel.nearby_locations or [])
            ]
        return hostels

    def update_rating(self, hostel_id: str, average_rating: float, review_count: int) -> None:
        self.db.execute(
            update(Hostel)
            .where(Hostel.id == hostel_id)
            .values(average_rating=average_rating, review_count=review_count)
            .execution_options(synchronize_session=False)
        )
        hostel = self.db.get(Hostel, hostel_id)
        if hostel is not None:
            self.db.refresh(hostel)


class RoomTypeRepository(BaseRepository[HostelRoomType]):

    def __init__(self, db: Session):
        super().__init__(HostelRoomType, db)

    def find_room_type(self, hostel_id: str, room_type: RoomType) -> Optional[HostelRoomType]:
        return (
            self.db.query(HostelRoomType)
            .filter(HostelRoomType.hostel_id == hostel_id, HostelRoomType.type == room_type)
            .first()
        )

    def _reload(self, hostel_id: str, room_type: RoomType) -> Optional[HostelRoomType]:
        entry = self.find_room_type(hostel_id, room_type)
        if entry is not None:
            self.db.refresh(entry)
        return entry

    def reserve_room(self, hostel_id: str, room_type: RoomType) -> HostelRoomType:
        """
        Take one room of ``room_type``.

        Raises:
            RoomUnavailableError: If the type does not exist or has no free room
        """
        self.db.flush()
        result = self.db.execute(
            update(HostelRoomType)
            .where(
                HostelRoomType.hostel_id == hostel_id,
                HostelRoomType.type == room_type,
                HostelRoomType.available_rooms > 0,
            )
            .values(available_rooms=HostelRoomType.available_rooms - 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            logger.warning(
                "Room reservation rejected: no availability",
                extra={"hostel_id": hostel_id, "room_type": room_type.value},
            )
            raise RoomUnavailableError(hostel_id=hostel_id, room_type=room_type.value)

        entry = self._reload(hostel_id, room_type)
        logger.info(
            f"Reserved {room_type.value} room in hostel {hostel_id}",
            extra={"available_rooms": entry.available_rooms if entry else None},
        )
        return entry

    def release_room(self, hostel_id: str, room_type: RoomType) -> Optional[HostelRoomType]:
        """
        Give back one room of ``room_type``, never exceeding ``total_rooms``.

        Returns None when the hostel no longer offers the type.
        """
        self.db.flush()
        result = self.db.execute(
            update(HostelRoomType)
            .where(HostelRoomType.hostel_id == hostel_id, HostelRoomType.type == room_type)
            .values(
                available_rooms=case(
                    (
                        HostelRoomType.available_rooms < HostelRoomType.total_rooms,
                        HostelRoomType.available_rooms + 1,
                    ),
                    else_=HostelRoomType.total_rooms,
                )
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            logger.warning(
                "Room release skipped: room type no longer offered",
                extra={"hostel_id": hostel_id, "room_type": room_type.value},
            )
            return None

        entry = self._reload(hostel_id, room_type)
        logger.info(
            f"Released {room_type.value} room in hostel {hostel_id}",
            extra={"available_rooms": entry.available_rooms if entry else None},
        )
        return entry

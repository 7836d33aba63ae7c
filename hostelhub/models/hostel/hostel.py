"""
Hostel listing and room inventory models.

Room types are stored one row per ``(hostel_id, type)`` so that the
room capacity is enforced by the database and availability can be
adjusted with a single conditional UPDATE.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Enum,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostelhub.models.base.base_model import TimestampModel
from hostelhub.models.base.enums import HostelFor, RoomType

if TYPE_CHECKING:
    from hostelhub.models.user.user import ManagerProfile

__all__ = ["Hostel", "HostelRoomType"]


class Hostel(TimestampModel):
    """
    Hostel listed by a manager.

    Attributes:
        manager_id: Owning manager profile
        nearby_locations: Landmarks used by search
        facilities: Facility flags and details (water, electricity, wifi, ...)
        average_rating: Mean review rating, rounded to one decimal
        review_count: Number of reviews
    """

    __tablename__ = "hostels"

    manager_id: Mapped[str] = mapped_column(
        ForeignKey("manager_profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    hostel_name: Mapped[str] = mapped_column(String(200), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    nearby_locations: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    hostel_for: Mapped[HostelFor] = mapped_column(
        Enum(HostelFor, name="hostel_for"),
        nullable=False,
    )
    facilities: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    room_images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    rules: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    seo_keywords: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    average_rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    manager: Mapped["ManagerProfile"] = relationship(
        back_populates="hostels",
        foreign_keys=[manager_id],
    )
    room_types: Mapped[List["HostelRoomType"]] = relationship(
        back_populates="hostel",
        cascade="all, delete-orphan",
        order_by="HostelRoomType.type",
    )

    @property
    def manager_email(self) -> Optional[str]:
        if self.manager is None or self.manager.user is None:
            return None
        return self.manager.user.email

    def get_room_type(self, room_type: RoomType) -> Optional["HostelRoomType"]:
        for entry in self.room_types:
            if entry.type == room_type:
                return entry
        return None


class HostelRoomType(TimestampModel):
    """
    Inventory for one room type of a hostel.

    ``available_rooms`` moves by exactly one per approval or departure and
    always stays within ``[0, total_rooms]``.
    """

    __tablename__ = "hostel_room_types"
    __table_args__ = (
        UniqueConstraint("hostel_id", "type", name="uq_hostel_room_type"),
        CheckConstraint(
            "available_rooms >= 0 AND available_rooms <= total_rooms",
            name="ck_room_type_availability",
        ),
        CheckConstraint("total_rooms > 0", name="ck_room_type_total_positive"),
        CheckConstraint("persons_in_room > 0", name="ck_room_type_persons_positive"),
    )

    hostel_id: Mapped[str] = mapped_column(
        ForeignKey("hostels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[RoomType] = mapped_column(Enum(RoomType, name="room_type"), nullable=False)
    total_rooms: Mapped[int] = mapped_column(Integer, nullable=False)
    available_rooms: Mapped[int] = mapped_column(Integer, nullable=False)
    persons_in_room: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    full_room_price_discounted: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Discounted whole-room price, SHARED_FULLROOM only",
    )
    urgent_booking_price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Price charged for off-cycle URGENT bookings",
    )

    hostel: Mapped["Hostel"] = relationship(back_populates="room_types")

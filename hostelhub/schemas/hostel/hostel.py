"""
Hostel listing, room inventory and review schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, HttpUrl, field_validator, model_validator

from hostelhub.models.base.enums import BookingType, ElectricityType, HostelFor, RoomType
from hostelhub.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "FacilitiesSchema",
    "RoomTypeConfig",
    "HostelCreate",
    "HostelUpdate",
    "HostelSearchParams",
    "RoomTypeResponse",
    "HostelResponse",
    "ReviewResponse",
    "HostelDetailResponse",
    "ReviewHostelBrief",
    "RandomReviewResponse",
    "HostelStudentResponse",
]


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class FacilitiesSchema(BaseSchema):
    hot_cold_water_bath: bool = False
    drinking_water: bool = False
    electricity_backup: bool = False
    electricity_type: ElectricityType = ElectricityType.INCLUDED
    electricity_rate_per_unit: Optional[float] = Field(default=None, ge=0)
    wifi_enabled: bool = False
    wifi_plan: Optional[str] = None
    wifi_max_users: Optional[int] = Field(default=None, ge=1)
    wifi_avg_speed: Optional[str] = None
    custom_facilities: List[str] = Field(default_factory=list)


class RoomTypeConfig(BaseSchema):
    """Capacity and pricing for one room type."""

    type: RoomType
    total_rooms: int = Field(..., gt=0)
    persons_in_room: int = Field(..., gt=0)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    full_room_price_discounted: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    urgent_booking_price: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)

    @model_validator(mode="after")
    def validate_discount_type(self) -> "RoomTypeConfig":
        if self.full_room_price_discounted is not None and self.type != RoomType.SHARED_FULLROOM:
            raise ValueError("Discounted full room price only applies to SHARED_FULLROOM type")
        return self


def _validate_room_types(room_types: List[RoomTypeConfig]) -> List[RoomTypeConfig]:
    types = [room_type.type for room_type in room_types]
    if len(set(types)) != len(types):
        raise ValueError("Each room type can only be added once")
    return room_types


class HostelCreate(BaseCreateSchema):
    hostel_name: str = Field(..., min_length=1, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=500)
    nearby_locations: List[str] = Field(default_factory=list)
    hostel_for: HostelFor
    room_types: List[RoomTypeConfig] = Field(..., min_length=1)
    facilities: FacilitiesSchema
    room_images: List[HttpUrl] = Field(default_factory=list)
    rules: Optional[str] = None
    seo_keywords: List[str] = Field(default_factory=list)

    @field_validator("room_types")
    @classmethod
    def validate_room_types(cls, v: List[RoomTypeConfig]) -> List[RoomTypeConfig]:
        return _validate_room_types(v)


class HostelUpdate(BaseUpdateSchema):
    hostel_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    address: Optional[str] = Field(default=None, min_length=1, max_length=500)
    nearby_locations: Optional[List[str]] = None
    hostel_for: Optional[HostelFor] = None
    room_types: Optional[List[RoomTypeConfig]] = Field(default=None, min_length=1)
    facilities: Optional[FacilitiesSchema] = None
    room_images: Optional[List[HttpUrl]] = None
    rules: Optional[str] = None
    seo_keywords: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @field_validator("room_types")
    @classmethod
    def validate_room_types(cls, v: Optional[List[RoomTypeConfig]]) -> Optional[List[RoomTypeConfig]]:
        if v is None:
            return v
        return _validate_room_types(v)


class HostelSearchParams(BaseSchema):
    city: Optional[str] = None
    nearby_location: Optional[str] = None
    room_type: Optional[RoomType] = None
    hostel_for: Optional[HostelFor] = None
    min_price: Optional[Decimal] = Field(default=None, ge=0)
    max_price: Optional[Decimal] = Field(default=None, ge=0)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RoomTypeResponse(BaseSchema):
    type: RoomType
    total_rooms: int
    available_rooms: int
    persons_in_room: int
    price: float
    full_room_price_discounted: Optional[float] = None
    urgent_booking_price: Optional[float] = None


class HostelResponse(BaseResponseSchema):
    manager_id: str
    manager_email: Optional[str] = None
    hostel_name: str
    city: str
    address: str
    nearby_locations: List[str]
    hostel_for: HostelFor
    facilities: dict
    room_images: List[str]
    rules: Optional[str] = None
    seo_keywords: List[str]
    is_active: bool
    average_rating: float
    review_count: int
    room_types: List[RoomTypeResponse]


class ReviewResponse(BaseSchema):
    id: str
    booking_id: str
    hostel_id: str
    rating: int
    comment: str
    reviewer_email: Optional[str] = None
    created_at: datetime


class HostelDetailResponse(HostelResponse):
    reviews: List[ReviewResponse] = Field(default_factory=list)


class ReviewHostelBrief(BaseSchema):
    id: str
    hostel_name: str
    city: str


class RandomReviewResponse(ReviewResponse):
    hostel: ReviewHostelBrief


class HostelStudentResponse(BaseSchema):
    """A student currently staying in a hostel, seen by its manager."""

    booking_id: str
    student_id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    institute: Optional[str] = None
    room_type: RoomType
    booking_type: BookingType
    amount: float
    approved_since: datetime

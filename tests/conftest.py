"""
Shared fixtures for the test suite.

Tests run against an in-memory SQLite database that is rebuilt for every
test, with a frozen clock so booking periods and fee months are stable.
"""

import os
from datetime import datetime

# Must be set before hostelhub.config.settings is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-enough-length")
os.environ.setdefault("PASSWORD_BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("FEE_PER_STUDENT", "100")
os.environ.setdefault("REGULAR_BOOKING_LAST_DAY", "12")

from decimal import Decimal

import pytest

from hostelhub.core.security import hash_password
from hostelhub.db.init_db import reset_db
from hostelhub.db.session import SessionLocal
from hostelhub.models.base.enums import BookingType, HostelFor, RoomType, UserRole
from hostelhub.models.hostel.hostel import HostelRoomType
from hostelhub.models.user.user import ManagerProfile, StudentProfile, User
from hostelhub.schemas.booking.booking import BookingCreate
from hostelhub.schemas.hostel.hostel import FacilitiesSchema, HostelCreate, RoomTypeConfig
from hostelhub.services.hostel import HostelService

DEFAULT_PASSWORD = "password123"

# Day 5: inside the regular booking window
REGULAR_DAY = datetime(2025, 3, 5, 10, 0, 0)
# Day 15: only urgent bookings are accepted
URGENT_DAY = datetime(2025, 3, 15, 10, 0, 0)


def pytest_collection_modifyitems(config, items):
    """Tag tests by directory so ``pytest -m unit`` and ``-m api`` work."""
    for item in items:
        path = str(getattr(item, "fspath", ""))
        if "/tests/api/" in path:
            item.add_marker(pytest.mark.api)
        elif "/tests/unit/" in path:
            item.add_marker(pytest.mark.unit)


class FrozenClock:
    """Callable clock the tests can move forward."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def __call__(self) -> datetime:
        return self.moment

    def set(self, moment: datetime) -> None:
        self.moment = moment


@pytest.fixture
def clock():
    return FrozenClock(REGULAR_DAY)


@pytest.fixture
def db():
    reset_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def make_user(db, email: str, role: UserRole, **profile_fields) -> User:
    user = User(email=email, password_hash=hash_password(DEFAULT_PASSWORD), role=role)
    db.add(user)
    db.flush()
    if role == UserRole.STUDENT:
        db.add(StudentProfile(user_id=user.id, **profile_fields))
    elif role == UserRole.MANAGER:
        db.add(ManagerProfile(user_id=user.id, **profile_fields))
    db.commit()
    db.refresh(user)
    return user


def make_student(db, email: str = "ali@uni.edu.pk") -> User:
    return make_user(
        db,
        email,
        UserRole.STUDENT,
        self_verified=True,
        full_name="Ali Raza",
        phone_number="03001234567",
        institute="Punjab University",
        city="Lahore",
    )


def make_manager(db, email: str = "owner@hostels.com.pk", verified: bool = True) -> User:
    return make_user(db, email, UserRole.MANAGER, verified=verified, full_name="Kamran Shah")


def hostel_payload(**overrides) -> HostelCreate:
    fields = dict(
        hostel_name="Green View Hostel",
        city="Lahore",
        address="12 Canal Road",
        nearby_locations=["Punjab University", "Canal Bank"],
        hostel_for=HostelFor.BOYS,
        room_types=[
            RoomTypeConfig(
                type=RoomType.SHARED,
                total_rooms=2,
                persons_in_room=3,
                price=Decimal("15000"),
                urgent_booking_price=Decimal("9000"),
            ),
            RoomTypeConfig(
                type=RoomType.PRIVATE,
                total_rooms=1,
                persons_in_room=1,
                price=Decimal("25000"),
            ),
        ],
        facilities=FacilitiesSchema(wifi_enabled=True, drinking_water=True),
        room_images=["https://res.cloudinary.com/demo/image/upload/room1.jpg"],
        rules="No smoking",
    )
    fields.update(overrides)
    return HostelCreate(**fields)


def booking_payload(hostel_id: str, room_type: RoomType = RoomType.SHARED, **overrides) -> BookingCreate:
    fields = dict(
        hostel_id=hostel_id,
        room_type=room_type,
        transaction_image="https://res.cloudinary.com/demo/image/upload/tx.jpg",
        transaction_date="2025-03-05",
        transaction_time="10:00",
        from_account="03001234567",
        to_account="03111234567",
        booking_type=BookingType.REGULAR,
    )
    fields.update(overrides)
    return BookingCreate(**fields)


def room_of(db, hostel_id: str, room_type: RoomType) -> HostelRoomType:
    """Fresh inventory row, bypassing the session's identity map."""
    db.expire_all()
    return (
        db.query(HostelRoomType)
        .filter(HostelRoomType.hostel_id == hostel_id, HostelRoomType.type == room_type)
        .one()
    )


@pytest.fixture
def student(db):
    return make_student(db)


@pytest.fixture
def manager(db):
    return make_manager(db)


@pytest.fixture
def admin(db):
    return make_user(db, "admin@hostelhub.com.pk", UserRole.ADMIN)


@pytest.fixture
def hostel(db, clock, manager):
    result = HostelService(db, clock).create_hostel(manager.id, hostel_payload())
    assert result.is_success, result.message
    return result.data

import pytest
from fastapi.testclient import TestClient

from hostelhub.api.deps import get_clock, get_storage
from hostelhub.core.security import create_access_token
from hostelhub.integrations.storage import ImageFile, ImageStorage
from hostelhub.main import app


class RecordingStorage(ImageStorage):
    """Keeps uploads in memory instead of sending them to Cloudinary."""

    def __init__(self):
        self.uploads = []

    def upload_image(self, image: ImageFile, folder: str) -> str:
        self.uploads.append((folder, image.filename))
        return f"https://res.cloudinary.com/demo/image/upload/{folder}/{image.filename}"


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def client(db, clock, storage):
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role.value)}"}


def hostel_json(**overrides) -> dict:
    body = {
        "hostel_name": "Green View Hostel",
        "city": "Lahore",
        "address": "12 Canal Road",
        "nearby_locations": ["Punjab University"],
        "hostel_for": "BOYS",
        "room_types": [
            {"type": "SHARED", "total_rooms": 2, "persons_in_room": 3, "price": 15000, "urgent_booking_price": 9000},
            {"type": "PRIVATE", "total_rooms": 1, "persons_in_room": 1, "price": 25000},
        ],
        "facilities": {"wifi_enabled": True, "electricity_type": "SELF", "electricity_rate_per_unit": 45},
        "room_images": ["https://res.cloudinary.com/demo/image/upload/room1.jpg"],
    }
    body.update(overrides)
    return body


def booking_json(hostel_id: str, **overrides) -> dict:
    body = {
        "hostel_id": hostel_id,
        "room_type": "SHARED",
        "transaction_image": "https://res.cloudinary.com/demo/image/upload/tx.jpg",
        "transaction_date": "2025-03-05",
        "transaction_time": "10:00",
        "from_account": "03001234567",
        "to_account": "03111234567",
    }
    body.update(overrides)
    return body

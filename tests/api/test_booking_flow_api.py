from tests.api.conftest import auth_headers, booking_json, hostel_json
from tests.conftest import URGENT_DAY

API = "/api/v1"


def _create_hostel(client, manager):
    response = client.post(f"{API}/hostels", json=hostel_json(), headers=auth_headers(manager))
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def _shared_available(client, hostel_id):
    detail = client.get(f"{API}/hostels/{hostel_id}").json()["data"]
    return next(room["available_rooms"] for room in detail["room_types"] if room["type"] == "SHARED")


def test_book_approve_and_leave(client, student, manager):
    hostel = _create_hostel(client, manager)
    assert hostel["manager_email"] == "owner@hostels.com.pk"

    created = client.post(f"{API}/bookings", json=booking_json(hostel["id"]), headers=auth_headers(student))
    assert created.status_code == 201
    booking = created.json()["data"]
    assert booking["status"] == "PENDING"
    assert booking["amount"] == 15000.0

    approved = client.post(f"{API}/bookings/{booking['id']}/approve", headers=auth_headers(manager))
    assert approved.status_code == 200
    assert approved.json()["data"]["status"] == "APPROVED"
    assert _shared_available(client, hostel["id"]) == 1

    residents = client.get(f"{API}/hostels/{hostel['id']}/students", headers=auth_headers(manager))
    assert [r["email"] for r in residents.json()["data"]] == ["ali@uni.edu.pk"]

    left = client.post(
        f"{API}/bookings/leave",
        json={"rating": 5, "review": "Friendly staff"},
        headers=auth_headers(student),
    )
    assert left.status_code == 200
    assert left.json()["data"]["review"]["rating"] == 5
    assert _shared_available(client, hostel["id"]) == 2

    again = client.post(
        f"{API}/bookings/leave",
        json={"rating": 1, "review": "Again"},
        headers=auth_headers(student),
    )
    assert again.status_code == 400
    assert again.json()["error_code"] == "DUPLICATE_REVIEW"


def test_regular_booking_closed_after_cutoff(client, clock, student, manager):
    hostel = _create_hostel(client, manager)
    clock.set(URGENT_DAY)

    regular = client.post(f"{API}/bookings", json=booking_json(hostel["id"]), headers=auth_headers(student))
    urgent = client.post(
        f"{API}/bookings",
        json=booking_json(hostel["id"], booking_type="URGENT"),
        headers=auth_headers(student),
    )

    assert regular.status_code == 400
    assert regular.json()["error_code"] == "BOOKING_PERIOD_CLOSED"
    assert urgent.status_code == 201
    assert urgent.json()["data"]["urgent_leave_date"].startswith("2025-04-01")


def test_students_cannot_create_hostels(client, student):
    response = client.post(f"{API}/hostels", json=hostel_json(), headers=auth_headers(student))

    assert response.status_code == 403


def test_terminated_student_cannot_book(client, admin, student, manager):
    hostel = _create_hostel(client, manager)
    client.post(f"{API}/users/{student.id}/terminate", headers=auth_headers(admin))

    response = client.post(f"{API}/bookings", json=booking_json(hostel["id"]), headers=auth_headers(student))
    profile = client.get(f"{API}/users/student/profile", headers=auth_headers(student))

    assert response.status_code == 403
    assert response.json()["error_code"] == "ACCOUNT_TERMINATED"
    assert profile.status_code == 200


def test_fee_submission_and_review(client, admin, student, manager):
    hostel = _create_hostel(client, manager)
    booking = client.post(f"{API}/bookings", json=booking_json(hostel["id"]), headers=auth_headers(student)).json()["data"]
    client.post(f"{API}/bookings/{booking['id']}/approve", headers=auth_headers(manager))

    submitted = client.post(
        f"{API}/fees",
        json={"hostel_id": hostel["id"], "month": "2025-03"},
        headers=auth_headers(manager),
    )
    assert submitted.status_code == 201
    fee = submitted.json()["data"]
    assert fee["student_count"] == 1
    assert fee["fee_amount"] == 100.0

    duplicate = client.post(
        f"{API}/fees",
        json={"hostel_id": hostel["id"], "month": "2025-03"},
        headers=auth_headers(manager),
    )
    assert duplicate.status_code == 409

    reviewed = client.post(f"{API}/fees/{fee['id']}/review", json={"status": "APPROVED"}, headers=auth_headers(admin))
    assert reviewed.json()["data"]["status"] == "APPROVED"

    summary = client.get(f"{API}/fees/pending-summary", headers=auth_headers(manager)).json()["data"]
    assert summary[0]["status"] == "APPROVED"
    assert summary[0]["needs_additional_payment"] is False


def test_public_search(client, manager):
    _create_hostel(client, manager)

    found = client.get(f"{API}/hostels/search", params={"city": "lahore", "room_type": "PRIVATE"})
    none = client.get(f"{API}/hostels/search", params={"hostel_for": "GIRLS"})

    assert len(found.json()["data"]) == 1
    assert none.json()["data"] == []

from tests.api.conftest import auth_headers

API = "/api/v1"
PNG = b"\x89PNG\r\n\x1a\n" + b"0" * 64


def test_upload_returns_urls(client, storage, manager):
    response = client.post(
        f"{API}/uploads/images",
        params={"folder": "hostels"},
        files=[("files", ("front.png", PNG, "image/png")), ("files", ("room.jpg", PNG, "image/jpeg"))],
        headers=auth_headers(manager),
    )

    assert response.status_code == 201
    assert response.json()["data"]["urls"] == [
        "https://res.cloudinary.com/demo/image/upload/hostels/front.png",
        "https://res.cloudinary.com/demo/image/upload/hostels/room.jpg",
    ]
    assert storage.uploads == [("hostels", "front.png"), ("hostels", "room.jpg")]


def test_upload_rejects_other_file_types(client, storage, student):
    response = client.post(
        f"{API}/uploads/images",
        files=[("files", ("cv.pdf", b"%PDF-1.7", "application/pdf"))],
        headers=auth_headers(student),
    )

    assert response.status_code == 400
    assert "files" in response.json()["errors"]
    assert storage.uploads == []


def test_upload_requires_login(client):
    response = client.post(f"{API}/uploads/images", files=[("files", ("a.png", PNG, "image/png"))])

    assert response.status_code == 401

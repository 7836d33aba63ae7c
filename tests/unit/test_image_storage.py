import cloudinary.exceptions
import cloudinary.uploader
import pytest

from hostelhub.core.exceptions import ExternalServiceError, ValidationError
from hostelhub.integrations.storage import CloudinaryImageStorage, ImageFile, validate_folder

PNG = b"\x89PNG\r\n\x1a\n" + b"0" * 64


@pytest.fixture
def storage():
    return CloudinaryImageStorage("demo", "key", "secret", root_folder="hostelhub")


def test_uploads_into_root_folder(monkeypatch, storage):
    calls = []

    def fake_upload(file, **options):
        calls.append(options)
        return {"secure_url": f"https://res.cloudinary.com/demo/{options['folder']}/{len(calls)}.png"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)

    urls = storage.upload_images([ImageFile("a.png", PNG), ImageFile("b.JPG", PNG)], "Hostels")

    assert urls == [
        "https://res.cloudinary.com/demo/hostelhub/hostels/1.png",
        "https://res.cloudinary.com/demo/hostelhub/hostels/2.png",
    ]
    assert calls[0]["resource_type"] == "image"


def test_rejects_bad_files_before_uploading(monkeypatch, storage):
    monkeypatch.setattr(cloudinary.uploader, "upload", lambda *a, **k: pytest.fail("uploaded"))

    with pytest.raises(ValidationError) as excinfo:
        storage.upload_images([ImageFile("notes.pdf", PNG), ImageFile("empty.png", b"")], "hostels")

    problems = excinfo.value.field_errors["files"]
    assert len(problems) == 2
    assert problems[0].startswith("notes.pdf")


def test_folder_names_are_restricted():
    with pytest.raises(ValidationError):
        validate_folder("../secrets")


def test_provider_errors_become_external_service_errors(monkeypatch, storage):
    def failing_upload(*args, **kwargs):
        raise cloudinary.exceptions.Error("quota exceeded")

    monkeypatch.setattr(cloudinary.uploader, "upload", failing_upload)

    with pytest.raises(ExternalServiceError):
        storage.upload_image(ImageFile("a.png", PNG), "hostels")


def test_unconfigured_storage_refuses_uploads():
    storage = CloudinaryImageStorage(None, None, None)

    with pytest.raises(ExternalServiceError):
        storage.upload_image(ImageFile("a.png", PNG), "hostels")

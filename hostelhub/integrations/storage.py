"""
Image storage collaborator.

Uploaded images live in Cloudinary; the rest of the system only ever sees
their URLs.
"""

import io
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from hostelhub.config.settings import settings
from hostelhub.core.exceptions import ExternalServiceError, ValidationError
from hostelhub.core.logging import get_logger

logger = get_logger(__name__)

FOLDER_PATTERN = re.compile(r"^[a-z0-9_-]{1,50}$")

# Oversized images are scaled down to fit, never up
IMAGE_TRANSFORMATION = [
    {"width": 1200, "height": 800, "crop": "limit"},
    {"quality": "auto"},
]


@dataclass
class ImageFile:
    """An image received from a client, fully read into memory."""

    filename: str
    content: bytes
    content_type: Optional[str] = None

    @property
    def extension(self) -> str:
        return os.path.splitext(self.filename or "")[1].lstrip(".").lower()

    @property
    def size(self) -> int:
        return len(self.content)


def validate_folder(folder: str) -> str:
    folder = (folder or "").strip().lower()
    if not FOLDER_PATTERN.match(folder):
        raise ValidationError(
            "Invalid upload folder",
            field_errors={"folder": ["Use 1-50 lowercase letters, digits, '-' or '_'"]},
        )
    return folder


def validate_images(files: List[ImageFile]) -> None:
    """
    Check count, extension and size of every file.

    Raises:
        ValidationError: Listing every offending file
    """
    if not files:
        raise ValidationError("No files uploaded", field_errors={"files": ["At least one file is required"]})
    if len(files) > settings.MAX_UPLOAD_FILES:
        raise ValidationError(
            f"At most {settings.MAX_UPLOAD_FILES} files can be uploaded at once",
            field_errors={"files": [f"Maximum {settings.MAX_UPLOAD_FILES} files"]},
        )

    allowed = settings.get_allowed_image_extensions()
    problems = []
    for image in files:
        if image.extension not in allowed:
            problems.append(f"{image.filename}: only {', '.join(allowed)} files are allowed")
        elif image.size == 0:
            problems.append(f"{image.filename}: file is empty")
        elif image.size > settings.MAX_UPLOAD_SIZE:
            problems.append(
                f"{image.filename}: exceeds {settings.MAX_UPLOAD_SIZE // (1024 * 1024)} MB"
            )
    if problems:
        raise ValidationError("Invalid image upload", field_errors={"files": problems})


class ImageStorage:
    """Stores images and returns their public URLs."""

    def upload_image(self, image: ImageFile, folder: str) -> str:
        raise NotImplementedError

    def upload_images(self, images: List[ImageFile], folder: str) -> List[str]:
        folder = validate_folder(folder)
        validate_images(images)
        return [self.upload_image(image, folder) for image in images]


class CloudinaryImageStorage(ImageStorage):

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        root_folder: str = "hostelhub",
    ):
        self.root_folder = root_folder
        self.configured = bool(cloud_name and api_key and api_secret)
        if self.configured:
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True,
            )
        else:
            logger.warning("Cloudinary credentials missing; image uploads are disabled")

    def upload_image(self, image: ImageFile, folder: str) -> str:
        if not self.configured:
            raise ExternalServiceError("Cloudinary", "Image storage is not configured")

        target = f"{self.root_folder}/{folder}"
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(image.content),
                folder=target,
                resource_type="image",
                transformation=IMAGE_TRANSFORMATION,
            )
        except cloudinary.exceptions.Error as e:
            logger.error(f"Cloudinary upload failed: {e}", extra={"folder": target, "upload_filename": image.filename})
            raise ExternalServiceError("Cloudinary", "Image upload failed") from e

        logger.info("Image uploaded", extra={"folder": target, "bytes": image.size})
        return result["secure_url"]


@lru_cache()
def get_image_storage() -> ImageStorage:
    return CloudinaryImageStorage(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        root_folder=settings.CLOUDINARY_ROOT_FOLDER,
    )

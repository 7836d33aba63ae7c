from hostelhub.integrations.storage import (
    CloudinaryImageStorage,
    ImageFile,
    ImageStorage,
    get_image_storage,
)

__all__ = ["CloudinaryImageStorage", "ImageFile", "ImageStorage", "get_image_storage"]

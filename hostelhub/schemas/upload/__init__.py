from hostelhub.schemas.upload.upload import UploadResponse

__all__ = ["UploadResponse"]

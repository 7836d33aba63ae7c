"""
Image upload schemas.
"""

from typing import List

from hostelhub.schemas.common.base import BaseSchema

__all__ = ["UploadResponse"]


class UploadResponse(BaseSchema):
    urls: List[str]

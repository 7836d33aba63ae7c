"""
Image upload endpoint. Domain endpoints only accept the returned URLs.
"""

from typing import List

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from hostelhub.api.deps import get_storage, require_active_user
from hostelhub.integrations.storage import ImageFile, ImageStorage
from hostelhub.models.user.user import User
from hostelhub.schemas.common.response import SuccessResponse
from hostelhub.schemas.upload.upload import UploadResponse

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.post("/images", status_code=status.HTTP_201_CREATED)
async def upload_images(
    files: List[UploadFile] = File(...),
    folder: str = Query(default="general", max_length=50),
    current_user: User = Depends(require_active_user),
    storage: ImageStorage = Depends(get_storage),
):
    images = [
        ImageFile(filename=upload.filename or "", content=await upload.read(), content_type=upload.content_type)
        for upload in files
    ]
    urls = await run_in_threadpool(storage.upload_images, images, folder)
    return SuccessResponse.create(UploadResponse(urls=urls), message="Images uploaded successfully")

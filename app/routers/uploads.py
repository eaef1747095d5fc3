"""
Image upload endpoint (admin only).
"""

from fastapi import APIRouter, Depends, File, UploadFile
from typing import Optional

from app.models.user import User
from app.services.upload import UploadService
from app.schemas.common import ImageUploadResponse
from app.utils.dependencies import get_current_admin_user, get_upload_service
from app.schemas.error import get_error_responses


router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.post(
    "",
    response_model=ImageUploadResponse,
    summary="Upload an image",
    description="Stores a single image (multipart field `image`) in Cloudinary and returns its URL.",
    responses=get_error_responses(400, 401, 403, 502)
)
async def upload_image(
    image: Optional[UploadFile] = File(None, description="Image file"),
    current_user: User = Depends(get_current_admin_user),
    upload_service: UploadService = Depends(get_upload_service)
) -> ImageUploadResponse:
    image_url = await upload_service.upload_image(image)
    return ImageUploadResponse(image_url=image_url)

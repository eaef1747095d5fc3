"""
Image upload service backed by Cloudinary.
"""

from typing import Optional
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool
from app.config import Settings
from app.utils.exceptions import FileUploadError, UpstreamError
import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
import io
import logging

logger = logging.getLogger(__name__)


class UploadService:
    """Validates an uploaded image and stores it in the configured Cloudinary folder."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def upload_image(self, file: Optional[UploadFile]) -> str:
        """
        Upload a single image.

        Args:
            file: Multipart ``image`` field

        Returns:
            Public HTTPS URL of the stored image

        Raises:
            FileUploadError: If no file was sent, it is not an image or is too large
            UpstreamError: If storage is not configured or the upload fails
        """
        if file is None or not file.filename:
            raise FileUploadError("No file uploaded")

        content_type = (file.content_type or "").lower()
        if not content_type.startswith("image/"):
            raise FileUploadError(f"File type '{file.content_type}' not allowed. Only images can be uploaded")

        raw = await file.read()
        if not raw:
            raise FileUploadError("Uploaded file is empty")
        if len(raw) > self.settings.max_upload_size:
            max_mb = self.settings.max_upload_size / (1024 * 1024)
            raise FileUploadError(f"File size exceeds maximum allowed size of {max_mb:.1f}MB")

        if not self.settings.cloudinary_configured:
            raise UpstreamError("Image storage is not configured", service="cloudinary")

        cloudinary.config(
            cloud_name=self.settings.cloudinary_cloud_name,
            api_key=self.settings.cloudinary_api_key,
            api_secret=self.settings.cloudinary_api_secret,
            secure=True,
        )

        try:
            # The SDK is blocking
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                io.BytesIO(raw),
                folder=self.settings.cloudinary_folder,
                resource_type="image",
            )
        except cloudinary.exceptions.Error as e:
            logger.error(f"Cloudinary upload failed for {file.filename}: {e}")
            raise UpstreamError(f"Image upload failed: {e}", service="cloudinary")

        image_url = result.get("secure_url") or result.get("url")
        if not image_url:
            raise UpstreamError("Image upload failed: no URL returned", service="cloudinary")

        logger.info(f"Uploaded image {file.filename} ({len(raw)} bytes) to {image_url}")
        return image_url

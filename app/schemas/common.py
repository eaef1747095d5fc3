"""
Small response schemas shared by several routers.
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Property removed"])


class ImageUploadResponse(BaseModel):
    image_url: str = Field(..., description="Public URL of the uploaded image")

"""
Pydantic schemas for testimonials.
"""

from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional
from datetime import datetime
from app.models.testimonial import MIN_RATING, MAX_RATING


class TestimonialCreate(BaseModel):
    """Submitted testimonial. Rating must be between 1 and 5 inclusive."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    message: str = Field(..., min_length=1)
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)


class TestimonialUpdate(BaseModel):
    """Moderation update; an explicit ``is_approved: false`` un-approves."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    message: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=MIN_RATING, le=MAX_RATING)
    is_approved: Optional[bool] = None

    @model_validator(mode="after")
    def reject_nulls(self):
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class TestimonialResponse(BaseModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    name: str
    email: str
    message: str
    rating: int
    is_approved: bool
    created_at: datetime
    updated_at: datetime

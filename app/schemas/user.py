"""
Pydantic schemas for user requests and responses.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional
from datetime import datetime
from app.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema with common fields."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name",
        examples=["Ada Obi"]
    )

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["ada@example.com"]
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class UserCreate(UserBase):
    """Self-service registration payload. New accounts always get the user role."""

    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Password (minimum 6 characters)"
    )


class UserUpdate(BaseModel):
    """Admin update of a user; omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip() if v is not None else v

    @model_validator(mode="after")
    def reject_nulls(self):
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class UserResponse(BaseModel):
    """User response schema (excluding sensitive data)."""

    id: str = Field(..., description="User's unique identifier")
    name: str
    email: EmailStr
    role: UserRole
    created_at: datetime
    updated_at: datetime

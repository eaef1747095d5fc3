"""
Pydantic schemas for authentication requests and responses.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from app.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, max_length=128, description="User's password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower().strip()


class RefreshTokenRequest(BaseModel):
    """Refresh token request schema."""

    refresh_token: str = Field(..., description="Valid refresh token")


class AccessTokenResponse(BaseModel):
    """Access token response schema."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration time in seconds")


class LoginResponse(AccessTokenResponse):
    """Login and registration response: user plus token pair."""

    user: UserResponse
    refresh_token: str = Field(..., description="JWT refresh token")

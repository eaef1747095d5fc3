"""
JWT helpers: token issuing and verification with role claims.
Password hashing lives on the User model.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, ExpiredSignatureError, jwt
from app.config import settings
from app.models.user import UserRole
import uuid


class TokenPayload:
    """Decoded JWT claims."""

    def __init__(self, user_id: str, email: str, role: Optional[str], exp: datetime):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        return cls(
            user_id=data["sub"],
            email=data["email"],
            role=data.get("role"),  # refresh tokens carry no role
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )


def _encode(claims: Dict[str, Any], lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {**claims, "iat": now, "exp": now + lifetime}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    role: UserRole,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token with user claims.

    Args:
        user_id: User's UUID
        email: User's email address
        role: User's role (user/admin)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    return _encode(
        {"sub": str(user_id), "email": email, "role": role.value, "type": "access"},
        lifetime
    )


def create_refresh_token(
    user_id: uuid.UUID,
    email: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT refresh token."""
    lifetime = expires_delta or timedelta(days=settings.refresh_token_expire_days)
    return _encode({"sub": str(user_id), "email": email, "type": "refresh"}, lifetime)


def verify_token(token: str, token_type: str = "access") -> TokenPayload:
    """
    Verify and decode JWT token.

    Args:
        token: JWT token string
        token_type: Expected token type ("access" or "refresh")

    Returns:
        Decoded token payload

    Raises:
        ExpiredSignatureError: If the token has expired
        JWTError: If the token is malformed, of the wrong type or missing claims
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm]
    )

    if payload.get("type") != token_type:
        raise JWTError(f"Invalid token type. Expected {token_type}")

    if not payload.get("sub") or not payload.get("email"):
        raise JWTError("Invalid token payload")

    return TokenPayload.from_dict(payload)



"""
Utility modules for the Real Estate Listings API.
"""

from .auth import (
    create_access_token,
    create_refresh_token,
    verify_token,
    TokenPayload
)

from .exceptions import (
    APIException,
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ConflictError,
    BadRequestError,
    UpstreamError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError,
    InsufficientPermissionsError,
    InvalidLocationError,
    DuplicateFavoriteError,
    DuplicateResourceError,
    FileUploadError,
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "create_access_token",
    "create_refresh_token",
    "verify_token",
    "TokenPayload",

    "APIException",
    "ValidationError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ConflictError",
    "BadRequestError",
    "UpstreamError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InsufficientPermissionsError",
    "InvalidLocationError",
    "DuplicateFavoriteError",
    "DuplicateResourceError",
    "FileUploadError",
]

"""
Error response schemas for API documentation and consistent error formatting.
Provides standardized error response models for OpenAPI documentation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["body -> rating"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Input should be less than or equal to 5"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["less_than_equal"]
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["VALIDATION_ERROR"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")
    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed error information for validation errors"
    )


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(..., description="Error information")


def _documented(description: str, code: str, message: str) -> Dict[str, Any]:
    return {
        "description": description,
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": code,
                        "message": message,
                        "timestamp": "2024-01-01T00:00:00Z",
                        "request_id": "abc12345"
                    }
                }
            }
        }
    }


COMMON_ERROR_RESPONSES = {
    400: _documented(
        "Bad Request - Invalid input or location",
        "INVALID_LOCATION",
        "Invalid city: Atlantis. Supported cities include: lagos, abuja, ibadan"
    ),
    401: _documented("Unauthorized - Authentication required", "UNAUTHORIZED", "Authentication required"),
    403: _documented("Forbidden - Admin role required", "FORBIDDEN", "Insufficient permissions to access admin resources"),
    404: _documented("Not Found - Resource not found", "NOT_FOUND", "Property not found"),
    409: _documented("Conflict - Resource already exists", "CONFLICT", "User with identifier 'ada@example.com' already exists"),
    422: _documented("Validation Error - Request validation failed", "VALIDATION_ERROR", "Request validation failed"),
    500: _documented("Internal Server Error", "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."),
    502: _documented("Bad Gateway - Upstream service failed", "UPSTREAM_ERROR", "Failed to fetch locations: upstream unavailable"),
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_auth_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get authentication and authorization error response schemas."""
    return get_error_responses(401, 403)


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for CRUD operations."""
    return get_error_responses(400, 401, 403, 404, 422, 500)

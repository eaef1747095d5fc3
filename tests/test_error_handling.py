"""
Tests for error handling.
Tests custom exceptions, error response formatting and the error envelope
returned by the running application.
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from unittest.mock import Mock
import json

from app.services.error_handler import ErrorHandlerService
from app.utils.exceptions import (
    ValidationError,
    NotFoundError,
    UnauthorizedError,
    InsufficientPermissionsError,
    InvalidLocationError,
    DuplicateFavoriteError,
    DuplicateResourceError,
    FileUploadError,
    UpstreamError,
)


class TestExceptions:
    """Status codes and error codes of the domain exceptions."""

    @pytest.mark.parametrize("exception, status_code, error_code", [
        (NotFoundError("Property", "abc"), 404, "NOT_FOUND"),
        (UnauthorizedError(), 401, "UNAUTHORIZED"),
        (InsufficientPermissionsError("access admin resources"), 403, "FORBIDDEN"),
        (InvalidLocationError("Invalid city: X"), 400, "INVALID_LOCATION"),
        (DuplicateFavoriteError(), 400, "DUPLICATE_FAVORITE"),
        (DuplicateResourceError("User", "a@b.com"), 409, "CONFLICT"),
        (FileUploadError("No file uploaded"), 400, "FILE_UPLOAD_ERROR"),
        (UpstreamError("Failed to fetch locations: timeout"), 502, "UPSTREAM_ERROR"),
    ])
    def test_status_and_code(self, exception, status_code, error_code):
        assert exception.status_code == status_code
        assert exception.error_code == error_code

    def test_not_found_message(self):
        assert NotFoundError("Property", "abc").detail == "Property not found with ID: abc"
        assert NotFoundError("Property").detail == "Property not found"

    def test_unauthorized_carries_bearer_challenge(self):
        assert UnauthorizedError().headers == {"WWW-Authenticate": "Bearer"}


class TestErrorHandlerService:
    """Test error handler service functionality."""

    def test_format_error_response(self):
        response = ErrorHandlerService.format_error_response(
            error_code="TEST_ERROR",
            message="Test error message",
            details=[{"field": "test", "message": "Test field error"}],
            request_id="test123"
        )

        assert response["error"]["code"] == "TEST_ERROR"
        assert response["error"]["message"] == "Test error message"
        assert response["error"]["request_id"] == "test123"
        assert response["error"]["details"][0]["field"] == "test"
        assert response["error"]["timestamp"].endswith("Z")

    def test_format_error_response_without_details(self):
        response = ErrorHandlerService.format_error_response("X", "y")
        assert "details" not in response["error"]

    def test_handle_api_exception(self):
        exception = ValidationError("Test validation error", field_errors=[{"field": "a", "message": "b"}])
        response = ErrorHandlerService.handle_api_exception(exception)

        assert response.status_code == 422
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "VALIDATION_ERROR"
        assert response_data["error"]["message"] == "Test validation error"
        assert response_data["error"]["details"] == [{"field": "a", "message": "b"}]
        assert response_data["error"]["request_id"]

    def test_handle_upstream_exception(self):
        response = ErrorHandlerService.handle_api_exception(UpstreamError("Failed to fetch prices: timeout"))

        assert response.status_code == 502
        assert json.loads(response.body)["error"]["message"] == "Failed to fetch prices: timeout"

    def test_handle_validation_error(self):
        mock_error = Mock()
        mock_error.errors.return_value = [
            {"loc": ("body", "rating"), "msg": "Input should be less than or equal to 5", "type": "less_than_equal"},
            {"loc": ("query", "min_price"), "msg": "Input should be a valid number", "type": "float_parsing"},
        ]

        response = ErrorHandlerService.handle_validation_error(mock_error)

        assert response.status_code == 422
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "VALIDATION_ERROR"
        assert response_data["error"]["details"][0]["field"] == "body -> rating"
        assert response_data["error"]["details"][1]["type"] == "float_parsing"

    def test_handle_integrity_error(self):
        integrity_error = IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed: users.email"))
        response = ErrorHandlerService.handle_database_error(integrity_error)

        assert response.status_code == 409
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "INTEGRITY_ERROR"
        assert response_data["error"]["message"] == "Constraint violation: Duplicate value for unique field"

    def test_handle_database_error_hides_details(self):
        error = OperationalError("SELECT secret_table", {}, Exception("no such table: secret_table"))
        response = ErrorHandlerService.handle_database_error(error)

        assert response.status_code == 500
        assert b"secret_table" not in response.body

    def test_handle_unexpected_error(self):
        response = ErrorHandlerService.handle_unexpected_error(Exception("boom"))

        assert response.status_code == 500
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "INTERNAL_SERVER_ERROR"
        assert "boom" not in response_data["error"]["message"]


class TestAPIErrorResponses:
    """Test the error envelope through actual endpoints."""

    @pytest.mark.asyncio
    async def test_authentication_error_response_format(self, async_client):
        response = await async_client.post("/api/properties", json={})

        assert response.status_code == 401
        error = response.json()["error"]
        assert error["code"] == "UNAUTHORIZED"
        assert error["message"] == "Authentication token required"
        assert set(error) >= {"code", "message", "timestamp", "request_id"}

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, async_client):
        response = await async_client.get("/api/auth/me", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["error"]["request_id"] == "trace-42"

    @pytest.mark.asyncio
    async def test_invalid_token(self, async_client):
        response = await async_client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_unknown_route(self, async_client):
        response = await async_client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "HTTP_404"

    @pytest.mark.asyncio
    async def test_malformed_id(self, async_client):
        response = await async_client.get("/api/properties/not-a-uuid")

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"][0]["field"] == "path -> property_id"

    @pytest.mark.asyncio
    async def test_not_found(self, async_client):
        response = await async_client.get("/api/properties/123e4567-e89b-12d3-a456-426614174000")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

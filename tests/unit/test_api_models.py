"""
Unit tests for API request/response models.

Tests Pydantic model parsing for registration and login endpoints.
"""

import pytest
from pydantic import ValidationError

from src.api.models import (
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    ValidationErrorResponse,
)


class TestRegisterRequest:
    """Tests for RegisterRequest model."""

    def test_valid_register_request(self) -> None:
        request = RegisterRequest(username="alice1", password="secret1", password_confirmation="secret1")
        assert request.username == "alice1"
        assert request.password == "secret1"
        assert request.password_confirmation == "secret1"

    def test_missing_fields_default_to_empty(self) -> None:
        """Content rules are left to domain validators."""
        request = RegisterRequest()
        assert request.username == ""
        assert request.password == ""
        assert request.password_confirmation == ""

    def test_short_values_accepted_by_model(self) -> None:
        request = RegisterRequest(username="ab", password="1")
        assert request.username == "ab"

    def test_non_string_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username=["alice1"])  # type: ignore[arg-type]


class TestLoginRequest:
    """Tests for LoginRequest model."""

    def test_valid_login_request(self) -> None:
        request = LoginRequest(username="alice1", password="secret1")
        assert request.username == "alice1"

    def test_ignores_confirmation_field(self) -> None:
        request = LoginRequest.model_validate(
            {"username": "alice1", "password": "secret1", "password_confirmation": "x"}
        )
        assert not hasattr(request, "password_confirmation")


class TestResponses:
    """Tests for response models."""

    def test_token_response(self) -> None:
        response = TokenResponse(access_token="abc.def.ghi", expires_in=3600)
        assert response.model_dump() == {"access_token": "abc.def.ghi", "expires_in": 3600}

    def test_error_response(self) -> None:
        assert ErrorResponse(detail="Internal server error").detail == "Internal server error"

    def test_validation_error_response(self) -> None:
        response = ValidationErrorResponse(detail="...", field="username", rule="unique")
        assert response.model_dump() == {"detail": "...", "field": "username", "rule": "unique"}

"""
API request and response models.

Pydantic models for FastAPI endpoint parsing and OpenAPI schema generation.
Request fields default to empty strings: content rules (required, length,
alphanum) belong to the domain validators, so a missing field is reported
as ``required`` by the same code path as an empty one.
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    username: str = Field(default="", description="3-15 alphanumeric characters")
    password: str = Field(default="", description="User password (min 6 characters)")
    password_confirmation: str = Field(default="", description="Must equal password")


class LoginRequest(BaseModel):
    """Request model for user authentication."""

    username: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    """Response model for successful registration or login."""

    access_token: str
    expires_in: int


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str


class ValidationErrorResponse(ErrorResponse):
    """Error response for a failed domain validation rule."""

    field: str
    rule: str


class JobResponse(BaseModel):
    """A catalog position as returned to API clients."""

    id: str
    type: str
    url: str
    created_at: str
    company: str
    company_url: str
    location: str
    title: str
    description: str
    how_to_apply: str
    company_logo: str

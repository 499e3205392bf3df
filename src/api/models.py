"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr
    password: str = Field(
        ..., min_length=8, max_length=128, description="User password (min 8 characters)"
    )


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str


class LoginRequest(BaseModel):
    """Request model for login."""

    email: str = Field(..., min_length=1, examples=["user@example.com"])
    password: str = Field(..., min_length=1, examples=["password123"])


class LoginResponse(BaseModel):
    """Response model for successful login."""

    token: str


class VerifyEmailResponse(BaseModel):
    """Response model for successful email verification."""

    message: str


class SessionResponse(BaseModel):
    """Claims of the presented session token."""

    email: str
    user_id: int
    expires_at: datetime


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
    errors: dict[str, str] | None = None

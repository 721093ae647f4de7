"""
Authentication I/O models for API requests and responses.

Username, password strength and email format are checked by the auth service
so that failures carry the ``INVALID_USERNAME`` / ``WEAK_PASSWORD`` /
``INVALID_EMAIL`` codes clients map to translated messages.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Schema for creating an account."""

    username: str = Field(min_length=1, max_length=64, description="Login name")
    email: str = Field(min_length=1, max_length=255, description="Email address")
    password: str = Field(description="Plain password, at least 6 characters")


class LoginRequest(BaseModel):
    """Schema for logging in with username and password."""

    username: str = Field(min_length=1, description="Login name")
    password: str = Field(min_length=1, description="Plain password")


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class AccessToken(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ForgetPasswordRequest(BaseModel):
    """Schema for resetting a password by email."""

    email: str = Field(min_length=1, max_length=255)
    new_password: str


class StatusResponse(BaseModel):
    status: str = "success"


class UserRead(BaseModel):
    """Schema for reading a user from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    is_active: bool
    created_at: datetime

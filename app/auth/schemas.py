"""
Users Auth API - Authentication Schemas

Pydantic models for authentication requests and responses.
"""

from typing import Any

from pydantic import BaseModel


class CredentialsRequest(BaseModel):
    """Request body for login and registration.

    Fields are untyped here so that missing or non-string values are reported
    by the handlers as 400 responses in a fixed order.
    """

    email: Any = None
    password: Any = None


class UserShort(BaseModel):
    """Public user projection."""

    email: str


class LoginResponse(BaseModel):
    """Response schema for a successful login."""

    auth: bool = True
    token: str
    user: UserShort


class RegisterResponse(BaseModel):
    """Response schema for a successful registration."""

    token: str
    user: UserShort


class VerificationResponse(BaseModel):
    """Response schema for a valid session."""

    auth: bool = True
    message: str = "Authenticated."


class ErrorResponse(BaseModel):
    """Body of every rejected request."""

    auth: bool = False
    message: str

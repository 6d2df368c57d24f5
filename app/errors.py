"""
Users Auth API - Errors

Application exceptions and the handler that renders them as
``{"auth": false, "message": ...}`` responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AuthAPIError(Exception):
    """Base class for errors that map directly to an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"auth": False, "message": self.message}


class ValidationError(AuthAPIError):
    """Missing or malformed email/password."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AuthAPIError):
    """Unknown user, wrong password, or absent/malformed authorization header."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ConflictError(AuthAPIError):
    """Registration for an email that is already taken."""

    status_code = 422


class TokenVerificationError(AuthAPIError):
    """
    A bearer token failed signature or format verification.

    Rendered as 500 rather than 401; clients of the verification endpoint
    depend on this status.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    INVALID_SIGNATURE = "invalid_signature"
    MALFORMED = "malformed"

    def __init__(self, message: str = "Failed to authenticate.", reason: str = MALFORMED):
        super().__init__(message)
        self.reason = reason


async def auth_api_error_handler(request: Request, exc: AuthAPIError) -> JSONResponse:
    """Render an AuthAPIError with its status code."""
    logger.info(
        f"{request.method} {request.url.path} -> {exc.status_code} "
        f"({exc.__class__.__name__}: {exc.message})"
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the application exception handlers to ``app``."""
    app.add_exception_handler(AuthAPIError, auth_api_error_handler)

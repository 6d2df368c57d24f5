"""
Users Auth API - Authentication Router

Endpoints for registration, login and session verification.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from app.auth.dependencies import get_auth_service, require_auth
from app.auth.schemas import (
    CredentialsRequest,
    ErrorResponse,
    LoginResponse,
    RegisterResponse,
    UserShort,
    VerificationResponse,
)
from app.auth.service import AuthService, validate_credentials
from app.errors import AuthenticationError, ConflictError


def create_auth_router(prefix: str = "") -> APIRouter:
    """Build the auth router mounted at ``prefix``."""
    router = APIRouter(prefix=prefix, tags=["Authentication"])

    @router.get(
        "/verification",
        response_model=VerificationResponse,
        responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        dependencies=[Depends(require_auth)],
        summary="Verify a bearer token",
    )
    async def verification() -> VerificationResponse:
        """Reached only when the Authorization header carries a valid token."""
        return VerificationResponse()

    @router.post(
        "/login",
        response_model=LoginResponse,
        responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
        summary="Login and get a token",
    )
    async def login(
        auth_service: Annotated[AuthService, Depends(get_auth_service)],
        request: Optional[CredentialsRequest] = None,
    ) -> LoginResponse:
        """
        Authenticate by email and password.

        Use the returned token in the Authorization header:
        `Authorization: Bearer <token>`
        """
        email = request.email if request else None
        password = request.password if request else None
        validate_credentials(email, password)

        user = await auth_service.authenticate_user(email=email, password=password)
        if user is None:
            raise AuthenticationError("Unauthorized")

        token = await auth_service.create_access_token(user)
        return LoginResponse(token=token, user=UserShort(**user.short()))

    @router.post(
        "/",
        response_model=RegisterResponse,
        status_code=status.HTTP_201_CREATED,
        responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
        summary="Register a new user",
    )
    async def register(
        auth_service: Annotated[AuthService, Depends(get_auth_service)],
        request: Optional[CredentialsRequest] = None,
    ) -> RegisterResponse:
        """
        Register a new user with email and password.

        Storage errors are not handled here and surface as server errors.
        """
        email = request.email if request else None
        password = request.password if request else None
        validate_credentials(email, password)

        user = await auth_service.register_user(email=email, password=password)
        if user is None:
            raise ConflictError("User may already exist")

        token = await auth_service.create_access_token(user)
        return RegisterResponse(token=token, user=UserShort(**user.short()))

    @router.get("/", response_class=PlainTextResponse, summary="Auth liveness")
    async def index() -> str:
        return "auth"

    return router

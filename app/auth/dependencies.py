import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.concurrency import run_in_threadpool
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.config import Settings
from app.database import get_database
from app.errors import AuthenticationError
from app.auth.service import AuthService
from app.auth.tokens import TokenIssuer
from app.users.repository import MongoUserRepository, UserRepositoryInterface

logger = logging.getLogger(__name__)


def get_user_repository(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> UserRepositoryInterface:
    """Dependency to get the MongoDB user repository."""
    return MongoUserRepository(db)


def get_settings(request: Request) -> Settings:
    """Dependency to get the settings the running app was built with."""
    return request.app.state.settings


def get_token_issuer(
    settings: Annotated[Settings, Depends(get_settings)]
) -> TokenIssuer:
    """Dependency to get a TokenIssuer bound to the configured secret."""
    return TokenIssuer(settings.JWT_SECRET_KEY, settings.JWT_ALGORITHM)


def get_auth_service(
    repository: Annotated[UserRepositoryInterface, Depends(get_user_repository)],
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    """Dependency to get AuthService instance with its collaborators."""
    return AuthService(repository, token_issuer, bcrypt_rounds=settings.BCRYPT_ROUNDS)


async def require_auth(
    request: Request,
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
) -> None:
    """
    Reject the request unless it carries a verifiable bearer token.

    The header must be exactly two space-separated parts (``Bearer <token>``).
    A token that fails verification raises TokenVerificationError, which is
    rendered as 500. The decoded email is not passed on to the handler.
    """
    authorization = request.headers.get("Authorization")
    if not authorization:
        logger.info(f"{request.url.path}: no authorization header")
        raise AuthenticationError("No authorization headers.")

    token_bearer = authorization.split(" ")
    if len(token_bearer) != 2:
        logger.info(f"{request.url.path}: malformed authorization header")
        raise AuthenticationError("Malformed token.")

    await run_in_threadpool(token_issuer.verify, token_bearer[1])


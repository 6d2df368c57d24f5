import logging
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email
from fastapi.concurrency import run_in_threadpool

from app.auth.passwords import hash_password, verify_password
from app.auth.tokens import TokenIssuer
from app.errors import ValidationError
from app.users.models import User
from app.users.repository import UserRepositoryInterface

logger = logging.getLogger(__name__)


def is_valid_email(email: Any) -> bool:
    """Syntactic email check; no DNS lookups.

    Reserved names such as ``.test`` or ``.local`` are accepted, but the
    domain must still contain a dot.
    """
    if not email or not isinstance(email, str):
        return False
    try:
        result = validate_email(email, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return "." in result.domain


def validate_credentials(email: Any, password: Any) -> None:
    """Raise ValidationError for a missing/malformed email, then for a missing password."""
    if not is_valid_email(email):
        raise ValidationError("Email is required or malformed")
    if not password or not isinstance(password, str):
        raise ValidationError("Password is required")


class AuthService:
    """Authentication service: credential checks, registration and token issuance.

    bcrypt runs in the threadpool so the event loop keeps serving other
    requests while a hash is computed.
    """

    def __init__(
        self,
        repository: UserRepositoryInterface,
        token_issuer: TokenIssuer,
        bcrypt_rounds: Optional[int] = None,
    ):
        self.repository = repository
        self.token_issuer = token_issuer
        self.bcrypt_rounds = bcrypt_rounds

    async def hash_password(self, password: str) -> str:
        return await run_in_threadpool(hash_password, password, self.bcrypt_rounds)

    async def verify_password(self, password: str, password_hash: str) -> bool:
        return await run_in_threadpool(verify_password, password, password_hash)

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Return the user when the password matches its stored hash."""
        user = await self.repository.find_by_pk(email)
        if user is None:
            logger.info(f"Login rejected: unknown user {email}")
            return None
        if not await self.verify_password(password, user.password_hash):
            logger.info(f"Login rejected: bad password for {email}")
            return None
        return user

    async def register_user(self, email: str, password: str) -> Optional[User]:
        """Register a new user. Returns None if the email is already taken."""
        password_hash = await self.hash_password(password)
        if not await self.verify_password(password, password_hash):
            logger.warning(f"Fresh password hash failed self-verification for {email}")

        if await self.repository.find_by_pk(email) is not None:
            logger.info(f"Registration rejected: {email} already exists")
            return None

        user = User(email=email, password_hash=password_hash)
        saved = await self.repository.save(user)
        logger.info(f"User registered: {saved.email}")
        return saved

    async def create_access_token(self, user: User) -> str:
        return await run_in_threadpool(self.token_issuer.issue, user)

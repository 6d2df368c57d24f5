"""
Users Auth API - Test Configuration

Shared fixtures for CI-safe testing without MongoDB.
"""

from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.config import settings
from app.auth.dependencies import get_token_issuer, get_user_repository
from app.auth.tokens import TokenIssuer
from app.users.models import User
from app.users.repository import UserRepositoryInterface

AUTH = settings.AUTH_ROUTE_PREFIX
TEST_SECRET = "test-secret-key-for-the-auth-suite"


class InMemoryUserRepository(UserRepositoryInterface):
    """In-memory user repository for testing."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self.save_calls = 0

    async def find_by_pk(self, email: str) -> Optional[User]:
        return self._users.get(email)

    async def save(self, user: User) -> User:
        self.save_calls += 1
        if user.email in self._users:
            raise RuntimeError(f"duplicate key: {user.email}")
        self._users[user.email] = user
        return user

    def get(self, email: str) -> Optional[User]:
        """Synchronous helper for tests that need direct access."""
        return self._users.get(email)

    def count(self) -> int:
        return len(self._users)

    def clear(self) -> None:
        self._users.clear()
        self.save_calls = 0


class FailingUserRepository(InMemoryUserRepository):
    """Repository whose writes always fail."""

    async def save(self, user: User) -> User:
        raise RuntimeError("database unavailable")


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET)


@pytest.fixture
def client(user_repository, token_issuer):
    """Create test client with in-memory repository and a fixed signing secret."""
    app.dependency_overrides[get_user_repository] = lambda: user_repository
    app.dependency_overrides[get_token_issuer] = lambda: token_issuer

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def credentials():
    return {"email": "alice@mail.com", "password": "correct horse battery"}


@pytest.fixture
def registered_user(client, credentials):
    """Register a test user and return credentials."""
    response = client.post(f"{AUTH}/", json=credentials)
    assert response.status_code == 201
    return credentials


@pytest.fixture
def auth_token(client, registered_user):
    """Get a token for the registered user."""
    response = client.post(f"{AUTH}/login", json=registered_user)
    return response.json()["token"]


@pytest.fixture
def auth_headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}

import logging
from abc import ABC, abstractmethod
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.users.models import User

logger = logging.getLogger(__name__)


class UserRepositoryInterface(ABC):
    """Abstract interface for user repository.

    Users are looked up by their primary key, the email address.
    """

    @abstractmethod
    async def find_by_pk(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persist a new user and return the stored entity."""
        pass


class MongoUserRepository(UserRepositoryInterface):
    """MongoDB implementation of the user repository."""

    COLLECTION_NAME = "users"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]

    async def find_by_pk(self, email: str) -> Optional[User]:
        doc = await self.collection.find_one({"_id": email})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def save(self, user: User) -> User:
        # Driver errors (duplicate key, connection loss) propagate to the caller.
        try:
            await self.collection.insert_one(user.to_dict())
        except Exception as e:
            logger.error(f"[MongoUserRepository] Error saving user {user.email}: {e}", exc_info=True)
            raise
        logger.info(f"[MongoUserRepository] User saved: {user.email}")
        return user

"""
Users Auth API - Users Module

User entity and persistence.
"""

from app.users.models import User
from app.users.repository import UserRepositoryInterface, MongoUserRepository

__all__ = ["User", "UserRepositoryInterface", "MongoUserRepository"]

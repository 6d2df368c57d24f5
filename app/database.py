"""
Users Auth API - Database Module

Each application owns one ``Database``; the lifespan connects it with the
URI and database name from the app's settings.
"""

import logging
from typing import Optional

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class Database:
    """Holds the Motor client for one application."""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    @property
    def is_connected(self) -> bool:
        return self.db is not None

    async def connect(self, uri: str, database_name: str) -> None:
        self.client = AsyncIOMotorClient(uri)
        self.db = self.client[database_name]
        logger.info(f"MongoDB client created for database '{database_name}'")

    async def disconnect(self) -> None:
        if self.client is not None:
            self.client.close()
        self.client = None
        self.db = None

    def get_database(self) -> AsyncIOMotorDatabase:
        if self.db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.db


async def get_database(request: Request) -> AsyncIOMotorDatabase:
    """Dependency to get the running app's database."""
    return request.app.state.database.get_database()

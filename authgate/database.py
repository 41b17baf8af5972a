"""
AUTHGATE Web - Database Module

MongoDB connection management using Motor (async driver).
User accounts are the only persisted data.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from authgate.config import settings

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB and make sure the user indexes exist."""
        self.client = AsyncIOMotorClient(settings.MONGODB_URI)
        self.db = self.client[settings.MONGODB_DATABASE]
        await self.ensure_indexes()

    async def ensure_indexes(self) -> None:
        # Emails are compared case-insensitively, so they are stored lowercased
        await self.get_database()[USERS_COLLECTION].create_index("email", unique=True)
        logger.info(f"Ensured unique email index on {settings.MONGODB_DATABASE}.{USERS_COLLECTION}")

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None

    def get_database(self) -> AsyncIOMotorDatabase:
        if self.db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.db


# Singleton database instance
database = Database()


async def get_database() -> AsyncIOMotorDatabase:
    """Dependency to get the database instance."""
    return database.get_database()

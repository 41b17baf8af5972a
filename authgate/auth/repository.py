import logging
from abc import ABC, abstractmethod
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from authgate.auth.models import User
from authgate.database import USERS_COLLECTION

logger = logging.getLogger(__name__)


class EmailAlreadyRegistered(Exception):
    """Raised when a user with the same email already exists."""


class UserRepositoryInterface(ABC):
    """Abstract interface for user repository.

    Emails are expected to be normalized (lowercased) by the caller.
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises EmailAlreadyRegistered on conflict."""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass


class MongoUserRepository(UserRepositoryInterface):
    """MongoDB implementation of the user repository."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[USERS_COLLECTION]

    async def create(self, user: User) -> User:
        try:
            await self.collection.insert_one(user.to_dict())
        except DuplicateKeyError as e:
            # Lost a race with a concurrent registration for the same email
            raise EmailAlreadyRegistered(user.email) from e
        logger.info(f"[MongoUserRepository] Created user id={user.id}")
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        doc = await self.collection.find_one({"_id": user_id})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def get_by_email(self, email: str) -> Optional[User]:
        doc = await self.collection.find_one({"email": email})
        if doc is None:
            return None
        return User.from_dict(doc)

    async def exists_by_email(self, email: str) -> bool:
        return await self.collection.count_documents({"email": email}, limit=1) > 0

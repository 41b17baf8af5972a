from typing import Annotated

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from authgate.database import get_database
from authgate.auth.service import AuthService
from authgate.auth.repository import MongoUserRepository


def get_auth_service(
    db: Annotated[AsyncIOMotorDatabase, Depends(get_database)]
) -> AuthService:
    """Dependency to get AuthService instance with MongoDB repository."""
    user_repo = MongoUserRepository(db)
    return AuthService(user_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]

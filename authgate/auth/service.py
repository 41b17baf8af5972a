import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import jwt, JWTError

from authgate.config import settings
from authgate.auth.models import User
from authgate.auth.repository import EmailAlreadyRegistered, UserRepositoryInterface

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service with password hashing and session token operations."""

    def __init__(self, repository: UserRepositoryInterface):
        self.repository = repository

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        password_bytes = password.encode("utf-8")
        salt = bcrypt.gensalt()
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        password_bytes = plain_password.encode("utf-8")
        hashed_bytes = hashed_password.encode("utf-8")
        return bcrypt.checkpw(password_bytes, hashed_bytes)

    def session_lifetime(self, remember: bool = False) -> timedelta:
        minutes = settings.REMEMBER_LIFETIME_MINUTES if remember else settings.SESSION_LIFETIME_MINUTES
        return timedelta(minutes=minutes)

    def create_session_token(
        self,
        user_id: str,
        remember: bool = False,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """Create a signed session token for the user."""
        if expires_delta is None:
            expires_delta = self.session_lifetime(remember)

        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": user_id,
            "exp": now + expires_delta,
            "iat": now,
            "remember": remember,
        }
        return jwt.encode(
            to_encode,
            settings.SESSION_SECRET_KEY,
            algorithm=settings.SESSION_ALGORITHM,
        )

    def decode_token(self, token: str) -> Optional[str]:
        """Decode and validate a session token. Returns user_id if valid."""
        try:
            payload = jwt.decode(
                token,
                settings.SESSION_SECRET_KEY,
                algorithms=[settings.SESSION_ALGORITHM],
            )
        except JWTError:
            return None
        return payload.get("sub")

    async def register_user(self, name: str, email: str, password: str) -> Optional[User]:
        """Register a new user. Returns None if the email is taken."""
        if await self.repository.exists_by_email(email):
            return None

        user = User.create(name=name, email=email, password_hash=self.hash_password(password))
        try:
            created = await self.repository.create(user)
        except EmailAlreadyRegistered:
            return None
        logger.info(f"Registered user id={created.id}")
        return created

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Authenticate user by email and password."""
        user = await self.repository.get_by_email(email)
        if user is None or not self.verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for email={email}")
            return None
        return user

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return await self.repository.get_by_id(user_id)

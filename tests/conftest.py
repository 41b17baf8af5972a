"""
AUTHGATE Web - Test Configuration

Shared fixtures for CI-safe testing without MongoDB.
"""

import asyncio
from typing import Dict, Optional
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from authgate.main import app
from authgate.auth.models import User
from authgate.auth.repository import EmailAlreadyRegistered, UserRepositoryInterface
from authgate.auth.service import AuthService
from authgate.auth.dependencies import get_auth_service
from authgate.database import get_database


BASE_URL = "http://testserver"


class InMemoryUserRepository(UserRepositoryInterface):
    """In-memory user repository for testing."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._users_by_email: Dict[str, User] = {}

    async def create(self, user: User) -> User:
        if user.email in self._users_by_email:
            raise EmailAlreadyRegistered(user.email)
        self._users[user.id] = user
        self._users_by_email[user.email] = user
        return user

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return self._users_by_email.get(email)

    async def exists_by_email(self, email: str) -> bool:
        return email in self._users_by_email

    def clear(self) -> None:
        """Clear all users (synchronous helper for tests)."""
        self._users.clear()
        self._users_by_email.clear()

    def get_by_email_sync(self, email: str) -> Optional[User]:
        """Synchronous helper for tests that need direct access."""
        return asyncio.run(self.get_by_email(email))


user_repository = InMemoryUserRepository()
auth_service = AuthService(user_repository)


async def override_get_auth_service():
    """Use the in-memory user repository instead of MongoDB."""
    return auth_service


async def override_get_database():
    """Database dependency is never reached in tests, but must resolve."""
    return MagicMock()


def make_user(
    email: str = "user@example.com",
    password: str = "password123",
    name: str = "Test User",
    is_admin: bool = False,
) -> User:
    return User.create(
        name=name,
        email=email,
        password_hash=auth_service.hash_password(password),
        is_admin=is_admin,
    )


def asgi_client() -> httpx.AsyncClient:
    """Async HTTP client wired straight to the application."""
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url=BASE_URL)


@pytest.fixture
def server():
    """Install dependency overrides on the app with an empty user store."""
    user_repository.clear()
    app.dependency_overrides[get_auth_service] = override_get_auth_service
    app.dependency_overrides[get_database] = override_get_database
    yield app
    app.dependency_overrides.clear()
    user_repository.clear()


@pytest.fixture
def client(server):
    """Create test client with in-memory repository."""
    return TestClient(server)


@pytest.fixture
def registered_user(client):
    """Register a test user and return the submitted details."""
    details = {
        "name": "Test User",
        "email": "testuser@example.com",
        "password": "testpassword123",
        "password_confirmation": "testpassword123",
    }
    client.post("/register", data=details, follow_redirects=False)
    client.cookies.clear()
    return details


@pytest.fixture
def logged_in_client(client, registered_user):
    """Test client carrying a valid session cookie."""
    client.post(
        "/login",
        data={"email": registered_user["email"], "password": registered_user["password"]},
        follow_redirects=False,
    )
    return client


@pytest.fixture
def admin_user(server):
    """Store an administrator directly in the repository."""
    user = make_user(email="admin@example.com", password="adminpassword123", name="Admin", is_admin=True)
    asyncio.run(user_repository.create(user))
    return {"email": "admin@example.com", "password": "adminpassword123"}

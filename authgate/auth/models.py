from dataclasses import dataclass, field
from datetime import datetime, timezone
import uuid


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


@dataclass
class User:
    """User account as stored in the ``users`` collection."""

    id: str
    name: str
    email: str
    password_hash: str
    is_admin: bool = False
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(cls, name: str, email: str, password_hash: str, is_admin: bool = False) -> "User":
        """Create a new user with generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
            is_admin=is_admin,
            created_at=_utcnow(),
        )

    def to_dict(self) -> dict:
        """Convert user to dictionary for MongoDB storage."""
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "password_hash": self.password_hash,
            "is_admin": self.is_admin,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create user from MongoDB document."""
        return cls(
            id=data["_id"],
            name=data["name"],
            email=data["email"],
            password_hash=data["password_hash"],
            is_admin=data.get("is_admin", False),
            created_at=data["created_at"],
        )

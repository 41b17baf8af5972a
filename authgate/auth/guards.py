"""
AUTHGATE Web - Authentication Guards

A guard is a named authentication strategy. Each one answers a single
question for a request: which user, if any, is authenticated under it.
"""

from typing import Dict, Optional

from fastapi import Request

from authgate.config import settings
from authgate.auth.models import User
from authgate.auth.service import AuthService


class SessionGuard:
    """Authenticates a request from the signed session cookie."""

    def __init__(self, name: str, admin_only: bool = False):
        self.name = name
        self.admin_only = admin_only

    async def user(self, request: Request, auth_service: AuthService) -> Optional[User]:
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        if not token:
            return None

        user_id = auth_service.decode_token(token)
        if user_id is None:
            return None

        user = await auth_service.get_user_by_id(user_id)
        if user is None:
            return None
        if self.admin_only and not user.is_admin:
            return None
        return user

    async def check(self, request: Request, auth_service: AuthService) -> bool:
        return await self.user(request, auth_service) is not None


GUARDS: Dict[str, SessionGuard] = {
    "web": SessionGuard("web"),
    "admin": SessionGuard("admin", admin_only=True),
}


def get_guard(name: str) -> SessionGuard:
    try:
        return GUARDS[name]
    except KeyError:
        raise ValueError(f"Auth guard [{name}] is not defined.") from None

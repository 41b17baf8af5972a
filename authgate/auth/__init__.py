"""
AUTHGATE Web - Authentication Module

Guards, the authentication middleware and the login/registration endpoints.
"""

from authgate.auth.router import router as auth_router
from authgate.auth.middleware import Authenticate, CurrentUser, AdminUser

__all__ = ["auth_router", "Authenticate", "CurrentUser", "AdminUser"]

"""
AUTHGATE Web - Security Validation

Startup checks for the session configuration.
"""

import warnings
from authgate.config import settings

DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"


def validate_security_config() -> None:
    """
    Validate security configuration on startup.

    Issues warnings for insecure configurations but does not crash the application
    (to allow tests and development to run).
    """
    if settings.SESSION_SECRET_KEY == DEFAULT_SECRET_KEY and settings.is_production:
        warnings.warn(
            "SECURITY WARNING: Using default SESSION_SECRET_KEY in production. "
            "Set SESSION_SECRET_KEY environment variable to a strong secret.",
            UserWarning,
        )

    if len(settings.SESSION_SECRET_KEY) < 32 and settings.is_production:
        warnings.warn(
            "SECURITY WARNING: SESSION_SECRET_KEY is too short for production. "
            "Use at least 32 characters.",
            UserWarning,
        )

    if not settings.SESSION_COOKIE_SECURE and settings.is_production:
        warnings.warn(
            "SECURITY WARNING: Session cookies are sent over plain HTTP. "
            "Set SESSION_COOKIE_SECURE=true in production.",
            UserWarning,
        )

    if "*" in str(settings.CORS_ORIGINS):
        warnings.warn(
            "SECURITY WARNING: CORS wildcard (*) detected together with credentialed "
            "requests. Set specific origins via CORS_ORIGINS.",
            UserWarning,
        )

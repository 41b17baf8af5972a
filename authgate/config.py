"""
AUTHGATE Web - Configuration Module

This module handles application configuration via environment variables.
"""

import os


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "AUTHGATE Web"
    APP_VERSION: str = "0.1.0"
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # MongoDB
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://mongodb:27017")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "authgate")

    # CORS - Allowed origins for client requests
    # Multiple origins can be comma-separated
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
        if origin.strip()
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Session tokens
    SESSION_SECRET_KEY: str = os.getenv("SESSION_SECRET_KEY", "dev-secret-key-change-in-production")
    SESSION_ALGORITHM: str = os.getenv("SESSION_ALGORITHM", "HS256")
    SESSION_LIFETIME_MINUTES: int = int(os.getenv("SESSION_LIFETIME_MINUTES", "120"))
    # "Remember me" sessions (default: 30 days)
    REMEMBER_LIFETIME_MINUTES: int = int(os.getenv("REMEMBER_LIFETIME_MINUTES", "43200"))

    # Cookies
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "authgate_session")
    SESSION_COOKIE_SECURE: bool = os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"
    FLASH_COOKIE_NAME: str = os.getenv("FLASH_COOKIE_NAME", "authgate_status")

    # Authentication
    AUTH_DEFAULT_GUARD: str = os.getenv("AUTH_DEFAULT_GUARD", "web")
    # Unauthenticated requests are always sent here, whatever guard failed
    AUTH_REDIRECT_ROUTE: str = os.getenv("AUTH_REDIRECT_ROUTE", "home")
    # Where successful logins and registrations land
    AUTH_HOME_ROUTE: str = os.getenv("AUTH_HOME_ROUTE", "dashboard")
    CAN_RESET_PASSWORD: bool = os.getenv("CAN_RESET_PASSWORD", "true").lower() == "true"

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"


settings = Settings()

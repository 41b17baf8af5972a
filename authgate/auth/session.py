"""
AUTHGATE Web - Session Cookies

Helpers that write the session cookie and the one-shot status ("flash")
cookie on responses.
"""

from typing import Optional
from urllib.parse import quote, unquote

from fastapi import Request, Response

from authgate.config import settings


def start_session(response: Response, token: str, max_age: Optional[int] = None) -> None:
    """Attach the session cookie. ``max_age=None`` keeps it for the browser session only."""
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=max_age,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def end_session(response: Response) -> None:
    response.delete_cookie(
        settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def flash_status(response: Response, message: str) -> None:
    response.set_cookie(
        settings.FLASH_COOKIE_NAME,
        quote(message),
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def pull_status(request: Request, response: Response) -> Optional[str]:
    """Read the flashed status message and drop it, so it is shown once."""
    raw = request.cookies.get(settings.FLASH_COOKIE_NAME)
    if raw is None:
        return None
    response.delete_cookie(settings.FLASH_COOKIE_NAME)
    return unquote(raw) or None

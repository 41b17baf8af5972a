"""
AUTHGATE Web - Authentication Exceptions

Errors raised by the auth layer and the handlers that turn them into responses.
"""

from typing import Dict, List, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError


class AuthenticationException(Exception):
    """The request carries no valid authentication for any of the route's guards."""

    def __init__(
        self,
        message: str = "Unauthenticated.",
        guards: Optional[List[str]] = None,
        redirect_to: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.guards = guards or []
        self.redirect_to = redirect_to


class ValidationFailure(Exception):
    """One or more submitted fields failed server-side validation."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__(self.summary())

    def summary(self) -> str:
        """First message, plus a count of the remaining ones."""
        messages = list(self.errors.values())
        if not messages:
            return "The given data was invalid."
        if len(messages) == 1:
            return messages[0]
        remaining = len(messages) - 1
        noun = "error" if remaining == 1 else "errors"
        return f"{messages[0]} (and {remaining} more {noun})"

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "ValidationFailure":
        """Collapse pydantic errors to one message per top-level field."""
        errors: Dict[str, str] = {}
        for error in exc.errors():
            loc = error.get("loc") or ("__root__",)
            errors.setdefault(str(loc[0]), error["msg"])
        return cls(errors)


def expects_json(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept


async def authentication_exception_handler(request: Request, exc: AuthenticationException):
    if expects_json(request) or exc.redirect_to is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": exc.message},
        )
    return RedirectResponse(exc.redirect_to, status_code=status.HTTP_302_FOUND)


async def validation_failure_handler(request: Request, exc: ValidationFailure):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"message": exc.summary(), "errors": exc.errors},
    )

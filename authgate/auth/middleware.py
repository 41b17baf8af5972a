"""
AUTHGATE Web - Authentication Middleware

Route-level guard check. Routes declare the guards they accept; a request
passes when it is authenticated under at least one of them.
"""

from typing import Annotated, NoReturn, Sequence

from fastapi import Depends, Request

from authgate.config import settings
from authgate.auth.dependencies import AuthServiceDep
from authgate.auth.exceptions import AuthenticationException
from authgate.auth.guards import get_guard
from authgate.auth.models import User


class Authenticate:
    """
    Dependency that requires authentication under one of ``guards``.

    With no guards the configured default guard is used. The authenticated
    user is returned to the route and kept on ``request.state``.
    """

    def __init__(self, *guards: str):
        self.guards = guards

    async def __call__(self, request: Request, auth_service: AuthServiceDep) -> User:
        guards = self.guards or (settings.AUTH_DEFAULT_GUARD,)

        for name in guards:
            user = await get_guard(name).user(request, auth_service)
            if user is not None:
                request.state.user = user
                request.state.guard = name
                return user

        self.unauthenticated(request, guards)

    def unauthenticated(self, request: Request, guards: Sequence[str]) -> NoReturn:
        # Same target for every guard: the public entry point
        raise AuthenticationException(
            guards=list(guards),
            redirect_to=self.redirect_to(request),
        )

    def redirect_to(self, request: Request) -> str:
        return str(request.url_for(settings.AUTH_REDIRECT_ROUTE))


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[User, Depends(Authenticate())]
AdminUser = Annotated[User, Depends(Authenticate("admin"))]

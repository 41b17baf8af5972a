"""
AUTHGATE Client - Route Table

Resolves route names to URL paths, the client-side counterpart of
``request.url_for`` on the server.
"""

from typing import Dict, Optional

import httpx

DEFAULT_ROUTES: Dict[str, str] = {
    "home": "/",
    "login": "/login",
    "login.store": "/login",
    "register": "/register",
    "register.store": "/register",
    "logout": "/logout",
    "password.request": "/forgot-password",
    "dashboard": "/dashboard",
}


class RouteTable:
    """Named-route to URL resolver."""

    def __init__(self, routes: Optional[Dict[str, str]] = None):
        self.routes = dict(DEFAULT_ROUTES if routes is None else routes)

    def url(self, name: str) -> str:
        try:
            return self.routes[name]
        except KeyError:
            raise KeyError(f"Route [{name}] not defined.") from None

    def has(self, name: str) -> bool:
        return name in self.routes

    @classmethod
    async def fetch(cls, http: httpx.AsyncClient, path: str = "/routes") -> "RouteTable":
        """Load the table from the server's named-route endpoint."""
        response = await http.get(path, headers={"Accept": "application/json"})
        response.raise_for_status()
        return cls(response.json())

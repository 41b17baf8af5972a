"""
AUTHGATE Web - Main Application

Serves the login/registration endpoints and the guarded areas behind them.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from starlette.routing import NoMatchFound

from authgate.config import settings
from authgate.database import database
from authgate.auth import auth_router
from authgate.auth.exceptions import (
    AuthenticationException,
    ValidationFailure,
    authentication_exception_handler,
    validation_failure_handler,
)
from authgate.dashboard import dashboard_router
from authgate.security import validate_security_config

import logging

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    validate_security_config()
    await database.connect()

    yield

    await database.disconnect()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Route guarding with a combined login and registration flow",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Accept", "Content-Type"],
)

app.add_exception_handler(AuthenticationException, authentication_exception_handler)
app.add_exception_handler(ValidationFailure, validation_failure_handler)


@app.get("/health", name="health", tags=["Health"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns the service status and version information.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@app.get("/", name="home", tags=["Root"])
async def root() -> dict:
    """Public entry point. Unauthenticated requests to guarded routes land here."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "login": app.url_path_for("login"),
        "register": app.url_path_for("register"),
    }


ROUTE_TREES = (auth_router, dashboard_router)


def route_names(routes) -> list:
    """Names of every API route, descending into included routers and mounts."""
    names = []
    for route in routes:
        if isinstance(route, APIRoute):
            names.append(route.name)
        names.extend(route_names(getattr(route, "routes", None) or []))
    return names


@app.get("/routes", name="routes", tags=["Root"])
async def named_routes(request: Request) -> dict:
    """Named-route table used by clients to resolve URLs by name."""
    names = route_names(request.app.routes)
    for router in ROUTE_TREES:
        names.extend(route_names(router.routes))

    table = {}
    for name in names:
        try:
            table[name] = str(request.app.url_path_for(name))
        except NoMatchFound:
            # Routes with path parameters cannot be resolved without arguments
            continue
    return table


app.include_router(auth_router)
app.include_router(dashboard_router)

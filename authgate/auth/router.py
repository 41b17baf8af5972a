"""
AUTHGATE Web - Authentication Router

Endpoints for the combined login/registration page, login, registration,
logout and the password-reset request page.
"""

import logging
from typing import Type, TypeVar

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, ValidationError

from authgate.config import settings
from authgate.auth.dependencies import AuthServiceDep
from authgate.auth.exceptions import ValidationFailure
from authgate.auth.guards import get_guard
from authgate.auth.middleware import CurrentUser
from authgate.auth.schemas import (
    LoginCredentials,
    RegistrationDetails,
    PageProps,
    PageResponse,
    ValidationErrorResponse,
)
from authgate.auth.session import end_session, flash_status, pull_status, start_session

logger = logging.getLogger(__name__)

FAILED_LOGIN_MESSAGE = "These credentials do not match our records."
EMAIL_TAKEN_MESSAGE = "The email has already been taken."
LOGGED_OUT_STATUS = "You have been logged out."

AUTH_PAGE_COMPONENT = "auth/login-and-register"
FORGOT_PASSWORD_COMPONENT = "auth/forgot-password"

SchemaT = TypeVar("SchemaT", bound=BaseModel)

router = APIRouter(tags=["Authentication"])

validation_responses = {
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ValidationErrorResponse},
}


async def read_payload(request: Request) -> dict:
    """Read a form-encoded or JSON request body into a plain dict."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            # Malformed JSON or a body that is not valid UTF-8
            payload = None
        if not isinstance(payload, dict):
            raise ValidationFailure({"body": "The request body must be a JSON object."})
        return payload

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


async def validate(request: Request, schema: Type[SchemaT]) -> SchemaT:
    payload = await read_payload(request)
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise ValidationFailure.from_validation_error(e) from e


def redirect_authenticated(request: Request) -> RedirectResponse:
    return RedirectResponse(
        str(request.url_for(settings.AUTH_HOME_ROUTE)),
        status_code=status.HTTP_303_SEE_OTHER,
    )


async def auth_page(
    request: Request,
    response: Response,
    auth_service: AuthServiceDep,
    tab: str,
):
    # Already signed in: nothing to do on the auth page
    if await get_guard(settings.AUTH_DEFAULT_GUARD).check(request, auth_service):
        return RedirectResponse(
            str(request.url_for(settings.AUTH_HOME_ROUTE)),
            status_code=status.HTTP_302_FOUND,
        )

    return PageResponse(
        component=AUTH_PAGE_COMPONENT,
        props=PageProps(
            canResetPassword=settings.CAN_RESET_PASSWORD,
            status=pull_status(request, response),
            tab=tab,
        ),
        url=request.url.path,
    )


@router.get(
    "/login",
    name="login",
    response_model=PageResponse,
    summary="Auth page, login tab",
)
async def login_page(request: Request, response: Response, auth_service: AuthServiceDep):
    return await auth_page(request, response, auth_service, tab="login")


@router.get(
    "/register",
    name="register",
    response_model=PageResponse,
    summary="Auth page, register tab",
)
async def register_page(request: Request, response: Response, auth_service: AuthServiceDep):
    return await auth_page(request, response, auth_service, tab="register")


@router.post(
    "/login",
    name="login.store",
    status_code=status.HTTP_303_SEE_OTHER,
    responses=validation_responses,
    summary="Log in",
)
async def login(request: Request, auth_service: AuthServiceDep) -> RedirectResponse:
    """
    Authenticate with email and password.

    On success the session cookie is set and the client is redirected to the
    authenticated area. ``remember`` makes the cookie outlive the browser session.
    """
    credentials = await validate(request, LoginCredentials)

    user = await auth_service.authenticate_user(
        email=credentials.email,
        password=credentials.password,
    )
    if user is None:
        raise ValidationFailure({"password": FAILED_LOGIN_MESSAGE})

    token = auth_service.create_session_token(user.id, remember=credentials.remember)
    max_age = None
    if credentials.remember:
        max_age = int(auth_service.session_lifetime(remember=True).total_seconds())

    response = redirect_authenticated(request)
    start_session(response, token, max_age=max_age)
    logger.info(f"User logged in: id={user.id}, remember={credentials.remember}")
    return response


@router.post(
    "/register",
    name="register.store",
    status_code=status.HTTP_303_SEE_OTHER,
    responses=validation_responses,
    summary="Register a new user",
)
async def register(request: Request, auth_service: AuthServiceDep) -> RedirectResponse:
    """
    Register a new user and log them in.

    - Name is required, at most 255 characters
    - Email must be a valid, unused address
    - Password must be at least 8 characters and match its confirmation
    """
    details = await validate(request, RegistrationDetails)

    user = await auth_service.register_user(
        name=details.name,
        email=details.email,
        password=details.password,
    )
    if user is None:
        raise ValidationFailure({"email": EMAIL_TAKEN_MESSAGE})

    response = redirect_authenticated(request)
    start_session(response, auth_service.create_session_token(user.id))
    return response


@router.post("/logout", name="logout", summary="Log out")
async def logout(request: Request, current_user: CurrentUser) -> RedirectResponse:
    response = RedirectResponse(
        str(request.url_for("home")),
        status_code=status.HTTP_303_SEE_OTHER,
    )
    end_session(response)
    flash_status(response, LOGGED_OUT_STATUS)
    logger.info(f"User logged out: id={current_user.id}")
    return response


@router.get(
    "/forgot-password",
    name="password.request",
    response_model=PageResponse,
    summary="Password reset request page",
)
async def forgot_password_page(request: Request, response: Response):
    return PageResponse(
        component=FORGOT_PASSWORD_COMPONENT,
        props=PageProps(
            canResetPassword=settings.CAN_RESET_PASSWORD,
            status=pull_status(request, response),
        ),
        url=request.url.path,
    )

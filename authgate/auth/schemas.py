"""
AUTHGATE Web - Authentication Schemas

Pydantic models for authentication requests and responses.
Validators raise one human-readable message per field; those messages are
what the client renders under each input.
"""

import re
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_STRING_LENGTH = 255
MIN_PASSWORD_LENGTH = 8
# bcrypt only accepts up to 72 bytes of input
MAX_PASSWORD_BYTES = 72


def _label(field_name: str) -> str:
    return field_name.replace("_", " ")


def require(value: str, info: ValidationInfo) -> str:
    if not value or not value.strip():
        raise PydanticCustomError(
            "required",
            "The {field} field is required.",
            {"field": _label(info.field_name)},
        )
    return value


def check_email(value: str, info: ValidationInfo) -> str:
    value = require(value, info).strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError(
            "email",
            "The {field} field must be a valid email address.",
            {"field": _label(info.field_name)},
        )
    return value


def check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise PydanticCustomError(
            "max_bytes",
            "The password field must not be greater than {limit} bytes.",
            {"limit": MAX_PASSWORD_BYTES},
        )
    return value


def check_max_length(value: str, info: ValidationInfo, limit: int = MAX_STRING_LENGTH) -> str:
    if len(value) > limit:
        raise PydanticCustomError(
            "max_length",
            "The {field} field must not be greater than {limit} characters.",
            {"field": _label(info.field_name), "limit": limit},
        )
    return value


class LoginCredentials(BaseModel):
    """Request schema for login. Exists only for one submission."""

    # Missing fields fall back to "" and still go through the validators
    model_config = ConfigDict(validate_default=True)

    email: str = ""
    password: str = Field(default="", repr=False)
    remember: bool = False

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str, info: ValidationInfo) -> str:
        return check_email(value, info)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str, info: ValidationInfo) -> str:
        return check_password_bytes(require(value, info))


class RegistrationDetails(BaseModel):
    """Request schema for user registration."""

    model_config = ConfigDict(validate_default=True)

    name: str = ""
    email: str = ""
    password: str = Field(default="", repr=False)
    password_confirmation: str = Field(default="", repr=False)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str, info: ValidationInfo) -> str:
        return check_max_length(require(value, info).strip(), info)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str, info: ValidationInfo) -> str:
        return check_max_length(check_email(value, info), info)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str, info: ValidationInfo) -> str:
        require(value, info)
        if len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "min_length",
                "The password field must be at least {limit} characters.",
                {"limit": MIN_PASSWORD_LENGTH},
            )
        return check_password_bytes(value)

    @field_validator("password_confirmation")
    @classmethod
    def validate_password_confirmation(cls, value: str, info: ValidationInfo) -> str:
        # Only compared when the password itself passed validation
        password = info.data.get("password")
        if password is not None and value != password:
            raise PydanticCustomError(
                "confirmed",
                "The password confirmation does not match.",
            )
        return value


class UserResponse(BaseModel):
    """Public user information response."""

    id: str
    name: str
    email: str
    is_admin: bool
    created_at: datetime


class DashboardResponse(BaseModel):
    area: str
    user: UserResponse


class PageProps(BaseModel):
    """Props handed to the client-side auth page."""

    canResetPassword: bool
    status: Optional[str] = None
    tab: str = "login"


class PageResponse(BaseModel):
    """A client page: which component to render, with which props."""

    component: str
    props: PageProps
    url: str


class ValidationErrorResponse(BaseModel):
    message: str
    errors: Dict[str, str]

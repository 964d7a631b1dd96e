"""
Pydantic input validation for account operations

Runs before any store access so malformed input never reaches the database.
"""

import logging
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from glossary_reminders.exceptions import ValidationError
from glossary_reminders.utils.auth import USERNAME_PATTERN

logger = logging.getLogger(__name__)

USERNAME_MAX_LENGTH = 64
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 256


class Credentials(BaseModel):
    """
    Username and password as submitted

    Constraints:
    - Username: 1-64 characters, letters, digits, underscores and hyphens
    - Password: at least 8 characters (checked on sign-up only)
    """
    username: str = Field(..., max_length=USERNAME_MAX_LENGTH)
    password: str = Field(..., max_length=PASSWORD_MAX_LENGTH)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Allow only alphanumeric characters, underscores, and hyphens"""
        if not v:
            raise ValueError("Username and password are required")
        if not USERNAME_PATTERN.fullmatch(v):
            raise ValueError("Username can only contain letters, numbers, underscores, and hyphens")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Username and password are required")
        return v


class SignupCredentials(Credentials):
    """Credentials for a new account, with the password strength rule"""

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
        return v


def _first_error(exc: PydanticValidationError) -> tuple[str, str]:
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error.get("loc") else "input"
    message = error["msg"]
    # Strip pydantic's "Value error, " prefix from custom validator messages
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return field, message


def validate_signup(username: str, password: str) -> SignupCredentials:
    """
    Validate sign-up input

    Raises:
        ValidationError: On the first failing field
    """
    try:
        return SignupCredentials(username=username or "", password=password or "")
    except PydanticValidationError as e:
        field, message = _first_error(e)
        raise ValidationError(message=message, field=field, operation="sign_up")


def validate_login(username: str, password: str) -> Credentials:
    """
    Validate login input (format only, no strength rule)

    Raises:
        ValidationError: On the first failing field
    """
    try:
        return Credentials(username=username or "", password=password or "")
    except PydanticValidationError as e:
        field, message = _first_error(e)
        raise ValidationError(message=message, field=field, operation="log_in")

"""
Result objects and error codes shared by every action.

Expected failures never raise: they come back as an ActionResult with
``success=False`` and an ``error_code`` from ErrorCode.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ErrorCode(str, Enum):
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    MISSING_PASSWORD = "MISSING_PASSWORD"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_CURRENT_PASSWORD = "INVALID_CURRENT_PASSWORD"
    AUTH_ERROR = "AUTH_ERROR"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    EMAIL_SEND_FAILED = "EMAIL_SEND_FAILED"
    ALREADY_VERIFIED = "ALREADY_VERIFIED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    PLAN_NOT_FOUND = "PLAN_NOT_FOUND"
    CUSTOM_PLAN = "CUSTOM_PLAN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
    INVALID_STATE = "INVALID_STATE"
    SYSTEM_ERROR = "SYSTEM_ERROR"


GENERIC_SYSTEM_ERROR = "We encountered a system error. Please try again later."
PASSWORD_RULES_ERROR = (
    "Password must be at least 8 characters with uppercase, lowercase, number, "
    "and special character"
)


class ActionResult(BaseModel):
    """Outcome of a server action, serialized as {success, error, errorCode, ...}."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    data: Optional[Any] = None

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, error_code: ErrorCode) -> "ActionResult":
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def system_error(cls, error: str = GENERIC_SYSTEM_ERROR) -> "ActionResult":
        return cls(success=False, error=error, error_code=ErrorCode.SYSTEM_ERROR)


def not_authenticated(error: str = "Not authenticated") -> ActionResult:
    return ActionResult.fail(error, ErrorCode.NOT_AUTHENTICATED)


def error_message(exc: BaseException) -> str:
    """Exception message only. Never log the exception's args or request data."""
    return str(exc) or exc.__class__.__name__

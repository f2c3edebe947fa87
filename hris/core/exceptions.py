"""
Client-side error types and the uniform failure-reporting helper.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

if TYPE_CHECKING:
    from hris.core.notify import Notifier

logger = logging.getLogger(__name__)

# Messages the backend uses for an expired / invalid access token
TOKEN_ERROR_MESSAGES = (
    "invalid or expired token",
    "token has expired",
    "token expired",
)


class HrisError(Exception):
    """Base class for every error raised by this package."""


class ApiError(HrisError):
    """A non-2xx or ``success: false`` response from the REST API."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details or {}

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code}, code={self.code!r}, message={self.message!r})"

    def is_auth_error(self) -> bool:
        return self.status_code == 401

    def is_token_expired(self) -> bool:
        if not self.is_auth_error():
            return False
        message = self.message.lower()
        return any(m in message for m in TOKEN_ERROR_MESSAGES)


class ClientValidationError(HrisError):
    """Form input rejected locally, before any request was sent."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


def error_message(exc: BaseException, fallback: str) -> str:
    """Message to show for *exc*: the server's own text when we recognise it."""
    if isinstance(exc, (ApiError, ClientValidationError)) and exc.message:
        return exc.message
    return fallback


def validation_message(exc: ValidationError) -> str:
    """First readable message of a pydantic validation failure."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    return str(errors[0].get("msg", "")).removeprefix("Value error, ")


def notify_failure(
    notifier: Notifier,
    exc: Exception,
    *,
    title: str = "Error",
    fallback: str,
) -> None:
    """Log *exc* and surface it as a single destructive toast."""
    if isinstance(exc, ApiError):
        logger.error("%s: %r", fallback, exc)
    elif isinstance(exc, ClientValidationError):
        logger.info("%s: %s", title, exc.message)
    else:
        logger.error("Unhandled error: %s", exc, exc_info=exc)
    notifier.error(error_message(exc, fallback), title=title)

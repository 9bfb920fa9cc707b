# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure leaves the server as {"error": ..., "code": ...}; store
# diagnostics are logged, never echoed back to the caller.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class LeaderboardException(Exception):
    """
    Base exception for the leaderboard API.

    All custom exceptions inherit from this class.
    Carries the HTTP status, a machine-readable code and a caller-safe message.
    """

    def __init__(
        self,
        message: str,
        code: str = "LEADERBOARD_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Client Errors
# =============================================================================

class InvalidArgumentError(LeaderboardException):
    """Raised when client-supplied data fails validation."""

    MESSAGES = {
        "name": "Name must be 1-20 characters",
        "score": "Invalid score",
    }

    def __init__(self, field: str):
        super().__init__(
            message=self.MESSAGES.get(field, "Invalid request body"),
            code="INVALID_ARGUMENT",
            status_code=400,
            details={"field": field},
        )
        self.field = field


class RateLimitExceededError(LeaderboardException):
    """Raised when a client goes over a fixed-window request ceiling."""

    def __init__(self, retry_after: int):
        super().__init__(
            message="Too many requests, please try again later.",
            code="RATE_LIMITED",
            status_code=429,
            headers={"Retry-After": str(retry_after)},
        )
        self.retry_after = retry_after


# =============================================================================
# Server Errors
# =============================================================================

class ServiceUnavailableError(LeaderboardException):
    """Raised when required store configuration is missing."""

    def __init__(self, message: str = "Server not configured"):
        super().__init__(
            message=message,
            code="SERVICE_UNAVAILABLE",
            status_code=503,
        )


class UnavailableError(LeaderboardException):
    """Raised when a read from the store fails."""

    def __init__(self, message: str, code: str = "UNAVAILABLE"):
        super().__init__(message=message, code=code, status_code=500)


class InternalError(LeaderboardException):
    """Raised when a write to the store fails."""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        super().__init__(message=message, code=code, status_code=500)


# =============================================================================
# Exception Handlers
# =============================================================================

async def leaderboard_exception_handler(
    request: Request,
    exc: LeaderboardException
) -> JSONResponse:
    """Convert LeaderboardException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


def first_invalid_field(exc: RequestValidationError) -> str:
    """
    Pick the field the client should fix first.

    Errors are reported in model field order, so name wins over score.
    A body that is missing or not an object is blamed on "name", the
    first field checked.
    """
    for error in exc.errors():
        loc = error.get("loc", ())
        if len(loc) >= 2 and loc[0] == "body" and loc[1] in ("name", "score"):
            return loc[1]
    return "name"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic request validation errors.

    Collapses the error list into a single InvalidArgumentError.
    """
    error = InvalidArgumentError(first_invalid_field(exc))
    logger.debug(f"Rejected {request.method} {request.url.path}: {error.field}")
    return await leaderboard_exception_handler(request, error)


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    This handler runs outside the app middleware, so the security headers
    are attached here.
    """
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        },
        headers=getattr(request.app.state, "security_headers", None),
    )

"""
Custom exception hierarchy for the Habit Tracker API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class HabitTrackerException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class EmailAlreadyRegisteredError(HabitTrackerException):
    http_status = status.HTTP_409_CONFLICT
    code = "EMAIL_ALREADY_REGISTERED"

    def __init__(self, email: str):
        super().__init__(
            message="Email already registered.",
            details={"email": email},
        )


class InvalidCredentialsError(HabitTrackerException):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_CREDENTIALS"

    def __init__(self):
        super().__init__(message="Invalid email or password.")


class NotAuthenticatedError(HabitTrackerException):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "NOT_AUTHENTICATED"

    def __init__(self):
        super().__init__(message="No bearer token provided.")


class InvalidTokenError(HabitTrackerException):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_TOKEN"

    def __init__(self):
        super().__init__(message="Invalid or expired token.")


class HabitNotFoundError(HabitTrackerException):
    """Raised for missing habits and for habits owned by another user alike."""
    http_status = status.HTTP_404_NOT_FOUND
    code = "HABIT_NOT_FOUND"

    def __init__(self, habit_id: int):
        super().__init__(
            message=f"Habit {habit_id} not found.",
            details={"habit_id": habit_id},
        )


class HabitAlreadyTrackedError(HabitTrackerException):
    http_status = status.HTTP_409_CONFLICT
    code = "HABIT_ALREADY_TRACKED"

    def __init__(self, habit_id: int, day: date):
        super().__init__(
            message=f"Habit {habit_id} is already tracked for {day}.",
            details={"habit_id": habit_id, "day": str(day)},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

_AUTH_HEADERS = {"WWW-Authenticate": "Bearer"}


async def habit_tracker_exception_handler(
    request: Request, exc: HabitTrackerException
) -> JSONResponse:
    headers = _AUTH_HEADERS if exc.http_status == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Plain function: SlowAPIMiddleware only calls synchronous handlers."""
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "code": "RATE_LIMITED",
            "message": "Too many requests, please try again later.",
            "details": {"limit": str(exc.detail)},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )

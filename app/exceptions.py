# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every failure is rendered to the client as {"error": <message>, "code": <code>}.
# The health score calculation is all-or-nothing: any of these exceptions means
# no scores were returned and nothing was written.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ArtpreneurException(Exception):
    """
    Base exception for the Artpreneur API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "ARTPRENEUR_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


# =============================================================================
# Health Score Exceptions
# =============================================================================

class AuthenticationError(ArtpreneurException):
    """Raised when the caller's bearer credential cannot be resolved to a user."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Authentication failed: {reason}",
            code="AUTHENTICATION_FAILED",
            status_code=401,
            suggestion="Sign in again and send the access token as 'Authorization: Bearer <token>'",
        )


class DataAccessError(ArtpreneurException):
    """Raised when one of the activity reads fails."""

    def __init__(self, source: str, error: str):
        super().__init__(
            message=f"Failed to read {source}: {error}",
            code="DATA_ACCESS_FAILED",
            status_code=502,
            suggestion="Try again later; no score was recorded",
            details={"source": source, "error": error},
        )


class PersistenceError(ArtpreneurException):
    """Raised when the health score upsert fails."""

    def __init__(self, user_id: str, error: str):
        super().__init__(
            message=f"Failed to save health score: {error}",
            code="PERSISTENCE_FAILED",
            status_code=502,
            suggestion="Try again later; the calculation was discarded",
            details={"user_id": user_id, "error": error},
        )


class HealthScoreNotFoundError(ArtpreneurException):
    """Raised when a user has never calculated a health score."""

    def __init__(self, user_id: str):
        super().__init__(
            message="No health score has been calculated yet",
            code="HEALTH_SCORE_NOT_FOUND",
            status_code=404,
            suggestion="Calculate one first using POST /api/v1/health-score/calculate",
            details={"user_id": user_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def artpreneur_exception_handler(
    request: Request,
    exc: ArtpreneurException
) -> JSONResponse:
    """Convert ArtpreneurException to JSON response."""
    if isinstance(exc, AuthenticationError):
        logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")
    elif exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle request validation errors."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )

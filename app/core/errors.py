# app/core/errors.py
"""Application error taxonomy.

Stores return ``None`` for unknown ids; these exceptions cover the remaining
expected failures and carry the HTTP status they map to.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or malformed input, rejected before classification."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class InvalidTransitionError(ConflictError):
    """A ticket status change that would move the ticket backwards."""


class ExternalProviderError(AppError):
    """The NLP provider failed. Logged and recovered from, never returned to a client."""

    status_code = status.HTTP_502_BAD_GATEWAY


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

"""API errors and response helpers."""

from app.errors import (
    ConflictError,
    NotFoundError,
    StorageUnavailableError,
    SurveyError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    "SurveyError",
    "ValidationError",
    "UnauthorizedError",
    "NotFoundError",
    "ConflictError",
    "StorageUnavailableError",
    "error_response",
]


def error_response(exc: SurveyError) -> tuple[int, dict[str, str]]:
    """Map a domain error to (status code, JSON body) for the router."""
    return exc.status_code, {"error": exc.message}

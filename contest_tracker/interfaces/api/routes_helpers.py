"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from contest_tracker.application.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[ValueError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
)


def to_http_exception(exc: ValueError) -> HTTPException:
    """Translate a use-case error into the matching HTTP error.

    Errors without a dedicated status are reported as ``400 Bad Request``.
    Validation errors keep the offending field next to the message.
    """

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "field": exc.field},
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

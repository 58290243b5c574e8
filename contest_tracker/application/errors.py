"""Errors raised by use cases and translated to HTTP responses by the API."""


class ValidationError(ValueError):
    """The request data is inconsistent; nothing was written."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(ValueError):
    """The referenced resource does not exist for the caller."""


class ConflictError(ValueError):
    """The resource already exists in a state that forbids the operation."""


class PermissionDeniedError(ValueError):
    """The caller is authenticated but not allowed to perform the operation."""


__all__ = ["ConflictError", "NotFoundError", "PermissionDeniedError", "ValidationError"]

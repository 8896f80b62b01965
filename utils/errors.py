"""
Error taxonomy for request handlers.

Every ``ApiError`` carries a user-facing message and an HTTP status code;
the exception handlers in ``api.middleware`` turn them into the standard
``{message, data, success}`` envelope.
"""

from __future__ import annotations

from fastapi import status


class ApiError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Required fields are missing"


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource does not exist"


class AuthenticationError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class AccessDenied(AuthenticationError):
    """Rejected bearer token. The response also clears the ``authToken`` cookie."""

    default_message = "Access Denied"
    clear_cookie = True


class HashingError(Exception):
    """The password hashing backend failed or a stored hash is unreadable."""

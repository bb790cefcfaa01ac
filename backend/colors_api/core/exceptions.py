"""
Typed failures raised by repositories, services and permission checks.

The HTTP layer maps each one to its status code and an
``{"error": {"message": ..., "status": ...}}`` payload.
"""

from fastapi import status


class ColorsAPIError(Exception):
    """Base class for expected, client-visible failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ColorsAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


class BadRequestError(ColorsAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class DuplicateError(BadRequestError):
    """Entity or membership already exists."""


class InvalidUpdateError(BadRequestError):
    """Partial update with nothing to change."""

    default_message = "No data"


class UnauthorizedError(ColorsAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class AuthenticationError(UnauthorizedError):
    """Credentials did not match a stored user."""

    default_message = "Invalid username/password"


class AuthorizationError(UnauthorizedError):
    """Caller identity lacks permission for the target resource."""

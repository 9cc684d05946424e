"""Domain errors raised by the stores and auth gates.

Each error carries the HTTP status it maps to and a message that is safe to
return to clients; ``main`` turns them into ``{"message": ...}`` responses.
"""
from fastapi import status


class BlogError(Exception):
    """Base class for errors with a client-facing message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(BlogError):
    """Missing, malformed or duplicate input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad Request"


class AuthError(BlogError):
    """Missing or unusable credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class InvalidTokenError(AuthError):
    """Token failed signature, expiry or claim checks."""

    default_message = "Unauthorized - Invalid token"


class ForbiddenError(AuthError):
    """Authenticated, but not allowed to do this (wrong role or not the owner)."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(BlogError):
    """The referenced user or post does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not Found"


class InternalError(BlogError):
    """Unexpected failure; only the generic message reaches the client."""

"""Error taxonomy shared by the store, the view engine and the services."""

from __future__ import annotations

from fastapi import status


class VidTubeError(Exception):
    """Base class for errors rendered in the response envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(VidTubeError):
    """Missing or malformed input (empty content, bad identifier, bad page)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationError(VidTubeError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class AuthorizationError(VidTubeError):
    """The caller does not own the resource it is trying to mutate."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You don't have permission to modify this resource"


class NotFoundError(VidTubeError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(VidTubeError):
    """A write violated a store-level uniqueness constraint."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class StoreError(VidTubeError):
    """The underlying store failed. Always treated as internal."""

    default_message = "Storage failure"


class UnknownReferenceError(VidTubeError):
    """A view or query referenced a collection or field that does not exist.

    This is a programming error, never a user-facing one.
    """

    default_message = "Unknown collection or field reference"

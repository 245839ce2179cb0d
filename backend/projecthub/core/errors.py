"""Service error types.

Services raise these instead of ``HTTPException`` so they stay usable outside
a request. ``projecthub.api.errors`` maps each type to its status code.
"""

from __future__ import annotations

from typing import Any

from fastapi import status


class ServiceError(Exception):
    """Base class for errors that map to a client-visible HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class UnauthorizedError(ServiceError):
    """No caller identity, or the bearer token could not be verified."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "unauthorized"
    default_message = "Unauthorized"


class ValidationError(ServiceError):
    """A required field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "validation_error"
    default_message = "Request validation failed"


class NotFoundError(ServiceError):
    """The resource does not exist or is not owned by the caller."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"
    default_message = "Not found"


class ConflictError(ServiceError):
    """A name is already taken within its project."""

    status_code = status.HTTP_409_CONFLICT
    error = "conflict"
    default_message = "Conflict"

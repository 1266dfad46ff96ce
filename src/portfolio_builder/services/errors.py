"""Exceptions raised by the service layer.

Each exception carries the HTTP status the API layer should answer with, so
routes and the application-level exception handler can translate them
without inspecting the message.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for expected, caller-facing service failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailed(ServiceError):
    """Input was malformed or violated a business rule."""

    status_code = 400


class ExternalAuthError(ServiceError):
    """The external (GitHub) credential is missing or expired."""

    status_code = 401


class AccessDenied(ServiceError):
    """The caller is authenticated but does not own the resource."""

    status_code = 403


class NotFound(ServiceError):
    """The requested resource does not exist (or must not be confirmed)."""

    status_code = 404


class RateLimited(ServiceError):
    """An upstream service throttled the request."""

    status_code = 429


class SlugAllocationError(ServiceError):
    """No unique slug could be allocated within the retry budget."""


class SyncFailed(ServiceError):
    """Repository synchronization failed for an unexpected upstream reason."""

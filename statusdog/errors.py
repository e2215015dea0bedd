# statusdog/errors.py
"""Exceptions raised by the service layer and caught by the UI handlers."""


class StatusDogError(RuntimeError):
    """Base class for every error the UI knows how to surface."""


class TransportError(StatusDogError):
    """The backend could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthError(TransportError):
    """No token is available, or the backend rejected it."""


class ValidationError(StatusDogError):
    """User input rejected before any network call."""


class StorageError(StatusDogError):
    """Local storage could not be read or written."""

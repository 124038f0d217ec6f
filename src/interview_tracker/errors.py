"""Exceptions raised by the tracker client."""
from typing import Any, Optional


class TrackerError(Exception):
    """Base exception for tracker client failures."""

    pass


class ConfigurationError(TrackerError):
    """Raised when the environment does not describe a usable backend."""

    pass


class TransportError(TrackerError):
    """Raised on a network failure, a non-2xx response or an unreadable body.

    Carries the failed operation, the HTTP status (None for network
    failures) and the backend's error payload when one was returned.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        self.operation = operation
        self.status_code = status_code
        self.body = body
        super().__init__(f"{operation}: {message}")


class ValidationError(TransportError):
    """Raised when the backend rejects a payload's shape or content."""

    pass


class NotFoundError(TransportError):
    """Raised when the referenced id does not exist on the backend."""

    pass

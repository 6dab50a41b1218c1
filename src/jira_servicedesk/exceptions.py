"""Exceptions raised by the Service Desk client."""

from __future__ import annotations


class ServiceDeskError(Exception):
    """Base exception for all client-side failures.

    HTTP error statuses returned by the server are not exceptions; they come
    back as ordinary responses.
    """

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:  # pragma: no cover - simple formatting
        if self.cause is None:
            return str(self.args[0])
        return f"{self.args[0]}: {self.cause}"


class ServiceDeskValidationError(ServiceDeskError, ValueError):
    """Raised when a request is built incorrectly."""


class ServiceDeskNetworkError(ServiceDeskError):
    """Raised for transport-level failures like DNS, TCP and TLS errors."""


class ServiceDeskTimeoutError(ServiceDeskNetworkError):
    """Raised when a request exceeds the configured timeout."""

    def __init__(self, message: str, *, timeout: float | None = None, cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.timeout = timeout

"""Shared exception hierarchy for the chat frontend."""
from __future__ import annotations

from typing import Optional


class PlatformError(Exception):
    """Base exception for domain specific failures."""


class FrontendError(PlatformError):
    """Raised when a frontend operation fails and should be shown to the user."""


class TransportError(FrontendError):
    """Raised when the backend could not be reached at all."""

    def __init__(self, message: str, *, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.cause = cause


class BackendError(FrontendError):
    """Raised for non-2xx backend responses."""

    def __init__(self, message: str, *, status_code: int | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class AuthorizationError(BackendError):
    """Raised when the backend rejects the bearer token (401/403)."""


class ValidationError(FrontendError):
    """Raised when input is rejected before any request is issued."""


__all__ = [
    "PlatformError",
    "FrontendError",
    "TransportError",
    "BackendError",
    "AuthorizationError",
    "ValidationError",
]

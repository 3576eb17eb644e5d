"""Authentication specific exceptions."""
from __future__ import annotations

from ..exceptions import FrontendError


class AuthenticationError(FrontendError):
    """Raised when login or registration fails."""


class NotLoggedInError(FrontendError):
    """Raised when an authenticated operation runs without a session token."""


__all__ = ["AuthenticationError", "NotLoggedInError"]

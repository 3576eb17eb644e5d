"""Authentication package exports."""
from __future__ import annotations

from .exceptions import AuthenticationError, NotLoggedInError
from .session import SessionStore

__all__ = ["AuthenticationError", "NotLoggedInError", "SessionStore"]

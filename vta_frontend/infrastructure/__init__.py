"""Infrastructure adapters for the chat frontend."""
from __future__ import annotations

from .http import BackendClient

__all__ = ["BackendClient"]

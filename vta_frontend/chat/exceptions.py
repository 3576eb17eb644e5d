"""Chat specific exceptions."""
from __future__ import annotations

from ..exceptions import FrontendError


class ChatError(FrontendError):
    """Base class for chat workspace failures."""


class ReplyPendingError(ChatError):
    """Raised when a question is submitted while another awaits its answer."""


__all__ = ["ChatError", "ReplyPendingError"]

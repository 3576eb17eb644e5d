"""Chat workspace package exports."""
from __future__ import annotations

from .history import MessageHistory, ReplyState, RequestTicket
from .registry import ChatSessionRegistry
from .service import ChatService

__all__ = ["ChatService", "ChatSessionRegistry", "MessageHistory", "ReplyState", "RequestTicket"]

"""Registry of the authenticated user's conversation threads."""
from __future__ import annotations

import logging

from ..auth.session import SessionStore
from .constants import NEW_SESSION_PATH, SESSIONS_PATH
from .schemas import ChatSession, NewSessionResponse, SessionListResponse

LOGGER = logging.getLogger(__name__)


class ChatSessionRegistry:
    """Cache the thread list and track which thread is active."""

    def __init__(self, session_store: SessionStore) -> None:
        self._store = session_store
        self._sessions: list[ChatSession] = []
        self._active_id: str | None = None

    @property
    def sessions(self) -> list[ChatSession]:
        return list(self._sessions)

    @property
    def active_id(self) -> str | None:
        return self._active_id

    def activate(self, session_id: str | None) -> None:
        self._active_id = session_id

    def get(self, session_id: str) -> ChatSession | None:
        return next((session for session in self._sessions if session.id == session_id), None)

    async def list_sessions(self) -> list[ChatSession]:
        """Fetch the threads in the order the backend returns them."""

        token = self._store.require_token()
        payload = await self._store.client.get_json(SESSIONS_PATH, token=token)
        self._sessions = SessionListResponse.model_validate(payload).sessions
        LOGGER.info("Chat sessions loaded | count=%d", len(self._sessions))
        return self.sessions

    async def create_session(self) -> str:
        """Open a new thread on the backend and return its id."""

        token = self._store.require_token()
        payload = await self._store.client.get_json(NEW_SESSION_PATH, token=token)
        session_id = NewSessionResponse.model_validate(payload).session_id
        LOGGER.info("Chat session created | session=%s", session_id)
        return session_id

    def clear(self) -> None:
        self._sessions = []
        self._active_id = None


__all__ = ["ChatSessionRegistry"]

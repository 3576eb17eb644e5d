"""Chat workspace service tying the session, thread registry and history together."""
from __future__ import annotations

import logging
from time import perf_counter

import pydantic

from ..auth.exceptions import AuthenticationError
from ..auth.session import SessionStore
from ..exceptions import FrontendError
from ..notifications import NotificationCenter
from .constants import (
    HISTORY_PATH,
    LOADING_MESSAGE,
    LOGIN_PROMPT,
    LOGIN_PROMPT_TITLE,
    QUERY_PATH,
    REPLY_PENDING_MESSAGE,
    REPLY_PENDING_TITLE,
)
from .history import MessageHistory
from .registry import ChatSessionRegistry
from .schemas import ChatSession, HistoryRequest, HistoryResponse, QueryRequest, QueryResponse

LOGGER = logging.getLogger(__name__)


class ChatService:
    """Run the user-facing chat operations and report failures as notifications."""

    def __init__(
        self,
        session_store: SessionStore,
        registry: ChatSessionRegistry,
        history: MessageHistory,
        notifications: NotificationCenter,
    ) -> None:
        self.session_store = session_store
        self.registry = registry
        self.history = history
        self.notifications = notifications
        self._loading_message = ""
        session_store.on_logout(self._teardown)

    @property
    def loading_message(self) -> str:
        return self._loading_message

    def set_loading(self, message: str) -> None:
        self._loading_message = message

    def prompt_login(self) -> None:
        self.notifications.error(LOGIN_PROMPT_TITLE, LOGIN_PROMPT)

    def notify_reply_pending(self) -> None:
        self.notifications.info(REPLY_PENDING_TITLE, REPLY_PENDING_MESSAGE)

    async def login(self, email: str, password: str) -> bool:
        try:
            await self.session_store.login(email, password)
        except AuthenticationError as exc:
            LOGGER.warning("Chat login rejected | error=%s", exc)
            self.notifications.error("Error", "Failed to authenticate. Please try again.")
            return False
        except FrontendError as exc:
            self.notifications.error("Error", str(exc))
            return False
        self.notifications.success("Success", "You have successfully logged in.")
        await self.refresh_sessions()
        return True

    async def register(self, email: str, password: str) -> bool:
        try:
            await self.session_store.register(email, password)
        except AuthenticationError as exc:
            LOGGER.warning("Chat registration rejected | error=%s", exc)
            self.notifications.error("Error", "Failed to authenticate. Please try again.")
            return False
        except FrontendError as exc:
            self.notifications.error("Error", str(exc))
            return False
        self.notifications.success("Success", "You have successfully registered and logged in.")
        await self.refresh_sessions()
        return True

    def logout(self) -> None:
        self.session_store.logout()
        self.notifications.info("Logged out", "You have been logged out.")

    async def refresh_sessions(self) -> list[ChatSession]:
        if not self.session_store.is_logged_in:
            return []
        try:
            return await self.registry.list_sessions()
        except (FrontendError, pydantic.ValidationError) as exc:
            LOGGER.warning("Failed to fetch chat sessions | error=%s", exc)
            self.notifications.error("Error", "Failed to load chat sessions")
            return self.registry.sessions

    async def start_new_chat(self) -> str | None:
        """Create a thread, make it active with an empty history.

        The new thread is only activated if the user neither logged out nor
        switched threads while the backend was creating it.
        """

        ticket = self.history.ticket()
        try:
            session_id = await self.registry.create_session()
        except (FrontendError, pydantic.ValidationError) as exc:
            LOGGER.warning("Failed to create chat session | error=%s", exc)
            if self.history.is_current(ticket):
                self.notifications.error("Error", "Failed to create new chat")
            return None
        if not (self.history.is_current(ticket) and self.session_store.is_logged_in):
            LOGGER.info("Discarding stale chat session | session=%s", session_id)
            return None
        self.registry.activate(session_id)
        self.history.switch(session_id)
        self.set_loading("")
        await self.refresh_sessions()
        return session_id

    async def ensure_active_thread(self) -> str | None:
        """Return the active thread id, creating a thread first when there is none.

        Returns ``None`` when no thread could be made active for this user.
        """

        if self.registry.active_id is not None:
            return self.registry.active_id
        session_id = await self.start_new_chat()
        if session_id is None or not self.session_store.is_logged_in or self.registry.active_id != session_id:
            return None
        return session_id

    async def select_thread(self, session_id: str) -> bool:
        """Switch to ``session_id`` and replace the messages with its stored history."""

        if not self.session_store.is_logged_in:
            self.prompt_login()
            return False
        self.registry.activate(session_id)
        ticket = self.history.switch(session_id)
        self.set_loading("")
        try:
            payload = await self.session_store.client.post_json(
                HISTORY_PATH,
                HistoryRequest(session_id=session_id).model_dump(),
                token=self.session_store.current_token(),
            )
            history = HistoryResponse.model_validate(payload).history
        except (FrontendError, pydantic.ValidationError) as exc:
            LOGGER.warning("Failed to load chat history | session=%s error=%s", session_id, exc)
            if self.history.is_current(ticket):
                self.notifications.error("Error", "Failed to load chat history")
            return False
        applied = self.history.replace(ticket, history)
        if applied:
            LOGGER.info("Chat history loaded | session=%s messages=%d", session_id, len(history))
        return applied

    async def load_history(self) -> bool:
        """Reload the stored history of the active thread."""

        if self.registry.active_id is None:
            return False
        return await self.select_thread(self.registry.active_id)

    async def submit_query(self, text: str | None) -> bool:
        """Send a question for the active thread.

        Returns ``False`` when the submission was rejected before any request
        was made.
        """

        query = text or ""
        if not query.strip():
            return False
        if not self.session_store.is_logged_in:
            self.prompt_login()
            return False
        if self.history.is_awaiting_reply:
            self.notify_reply_pending()
            return False

        session_id = await self.ensure_active_thread()
        if session_id is None:
            return False
        if self.history.is_awaiting_reply:
            self.notify_reply_pending()
            return False

        ticket = self.history.submit(query)
        self.set_loading(LOADING_MESSAGE)
        start = perf_counter()
        try:
            payload = await self.session_store.client.post_json(
                QUERY_PATH,
                QueryRequest(query=query, session_id=session_id).model_dump(),
                token=self.session_store.current_token(),
            )
            reply = QueryResponse.model_validate(payload)
        except (FrontendError, pydantic.ValidationError) as exc:
            LOGGER.warning("Chat query failed | session=%s error=%s", session_id, exc)
            self.history.fail(ticket)
        else:
            applied = self.history.resolve(ticket, reply.answer, reply.source_nodes)
            LOGGER.info(
                "Chat query answered | session=%s duration=%.2fs sources=%d applied=%s",
                session_id,
                perf_counter() - start,
                len(reply.source_nodes or []),
                applied,
            )
        finally:
            if self.history.is_current(ticket):
                self.set_loading("")
        return True

    def _teardown(self) -> None:
        self.registry.clear()
        self.history.clear()
        self.set_loading("")


__all__ = ["ChatService"]

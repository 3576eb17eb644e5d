"""Per-thread message history with optimistic appends and stale-reply guarding."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .constants import APOLOGY_MESSAGE
from .exceptions import ReplyPendingError
from .schemas import ChatMessage, SourceNode

LOGGER = logging.getLogger(__name__)


class ReplyState(str, Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"


@dataclass(frozen=True, slots=True)
class RequestTicket:
    """Identifies the thread and generation a pending request belongs to."""

    thread_id: str | None
    generation: int


class MessageHistory:
    """Ordered message sequence for the active thread.

    Every thread switch, reload and logout bumps a monotonic generation. A
    request captures the generation as a :class:`RequestTicket` when it is
    issued, and its result is only applied while that generation is still
    current; replies that arrive after the user moved to another thread are
    dropped.

    The optimistic user message appended by :meth:`submit` is never rolled
    back. A failed request adds an apology instead.
    """

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []
        self._thread_id: str | None = None
        self._generation = 0
        self._state = ReplyState.IDLE

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def thread_id(self) -> str | None:
        return self._thread_id

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> ReplyState:
        return self._state

    @property
    def is_awaiting_reply(self) -> bool:
        return self._state is ReplyState.AWAITING_REPLY

    def __len__(self) -> int:
        return len(self._messages)

    def ticket(self) -> RequestTicket:
        return RequestTicket(thread_id=self._thread_id, generation=self._generation)

    def is_current(self, ticket: RequestTicket) -> bool:
        return ticket.generation == self._generation

    def submit(self, content: str) -> RequestTicket:
        """Append the user's message ahead of confirmation."""

        if self.is_awaiting_reply:
            raise ReplyPendingError("A reply is still pending for this conversation.")
        self._messages.append(ChatMessage.user(content))
        self._state = ReplyState.AWAITING_REPLY
        return self.ticket()

    def reserve(self) -> RequestTicket:
        """Claim the reply slot for a request whose user message is not known yet.

        Used for voice questions: the transcript arrives together with the
        answer and is added by :meth:`splice`.
        """

        if self.is_awaiting_reply:
            raise ReplyPendingError("A reply is still pending for this conversation.")
        self._state = ReplyState.AWAITING_REPLY
        return self.ticket()

    def release(self, ticket: RequestTicket) -> bool:
        """Give up a reserved slot without adding anything."""

        if not self._accepts(ticket, "release"):
            return False
        self._state = ReplyState.IDLE
        return True

    def resolve(self, ticket: RequestTicket, answer: str, source_nodes: list[SourceNode] | None = None) -> bool:
        return self._settle(ticket, ChatMessage.assistant(answer, source_nodes))

    def fail(self, ticket: RequestTicket) -> bool:
        return self._settle(ticket, ChatMessage.assistant(APOLOGY_MESSAGE))

    def switch(self, thread_id: str | None) -> RequestTicket:
        """Make ``thread_id`` active and invalidate everything in flight."""

        self._generation += 1
        self._thread_id = thread_id
        self._messages = []
        self._state = ReplyState.IDLE
        LOGGER.debug("History switched | thread=%s generation=%d", thread_id, self._generation)
        return self.ticket()

    def replace(self, ticket: RequestTicket, messages: Iterable[ChatMessage]) -> bool:
        """Install a freshly fetched history for the ticket's thread."""

        if not self._accepts(ticket, "replace"):
            return False
        self._messages = list(messages)
        return True

    def splice(self, ticket: RequestTicket, messages: Iterable[ChatMessage]) -> bool:
        """Append already confirmed messages, in order, and free the reply slot."""

        if not self._accepts(ticket, "splice"):
            return False
        self._messages.extend(messages)
        self._state = ReplyState.IDLE
        return True

    def clear(self) -> None:
        self.switch(None)

    def _settle(self, ticket: RequestTicket, message: ChatMessage) -> bool:
        if not self._accepts(ticket, "settle"):
            return False
        self._messages.append(message)
        self._state = ReplyState.IDLE
        return True

    def _accepts(self, ticket: RequestTicket, operation: str) -> bool:
        if self.is_current(ticket):
            return True
        LOGGER.debug(
            "Discarding stale response | operation=%s thread=%s generation=%d current=%d",
            operation,
            ticket.thread_id,
            ticket.generation,
            self._generation,
        )
        return False


__all__ = ["MessageHistory", "ReplyState", "RequestTicket"]

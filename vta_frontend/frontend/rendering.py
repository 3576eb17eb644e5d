"""Pure helpers turning workspace state into Gradio component values."""
from __future__ import annotations

from collections.abc import Iterable, MutableMapping, Sequence
from html import escape
from typing import Any, Dict

from ..chat.schemas import ChatMessage, ChatSession, SourceNode
from ..documents.schemas import Manual
from ..notifications import Notification

STATUS_CSS = """
.status-box {
    padding: 0.75rem 1rem;
    border-radius: 0.75rem;
    margin-top: 0.75rem;
    font-weight: 500;
}
.status-box.info {
    background: rgba(0, 123, 192, 0.10);
    border: 1px solid rgba(0, 123, 192, 0.45);
    color: #005691;
}
.status-box.success {
    background: rgba(21, 128, 61, 0.10);
    border: 1px solid rgba(21, 128, 61, 0.45);
    color: #166534;
}
.status-box.error {
    background: rgba(220, 38, 38, 0.10);
    border: 1px solid rgba(220, 38, 38, 0.45);
    color: #991b1b;
}
"""

SOURCES_TITLE = "View Sources"
NO_SESSIONS_TEXT = "No chat history available"
LOGGED_OUT_SESSIONS_TEXT = "Please log in to see your chats."
NO_MANUALS_TEXT = "No files have been uploaded yet"


def status_message(message: str, level: str = "info") -> str:
    if not message:
        return ""
    return f"<div class='status-box {level}'>{escape(message)}</div>"


def notification_html(notifications: Sequence[Notification]) -> str:
    """Render the most recent notification, if any."""

    if not notifications:
        return ""
    latest = notifications[-1]
    return status_message(f"{latest.title}: {latest.description}", latest.level)


def format_sources(source_nodes: Iterable[SourceNode]) -> str:
    blocks = []
    for index, node in enumerate(source_nodes, start=1):
        blocks.append(f"**Source #{index}** · Relevance Score: {node.relevance}\n\n{node.text.strip()}")
    return "\n\n---\n\n".join(blocks)


def chatbot_messages(messages: Iterable[ChatMessage]) -> list[Dict[str, Any]]:
    """Convert the history into the ``messages`` format of ``gr.Chatbot``.

    Source citations follow their answer as a collapsible assistant bubble.
    """

    rendered: list[Dict[str, Any]] = []
    for message in messages:
        rendered.append({"role": message.role, "content": message.content})
        if message.role == "assistant" and message.source_nodes:
            rendered.append(
                {
                    "role": "assistant",
                    "content": format_sources(message.source_nodes),
                    "metadata": {"title": SOURCES_TITLE, "status": "done"},
                }
            )
    return rendered


def session_choices(sessions: Iterable[ChatSession]) -> list[tuple[str, str]]:
    return [(session.title or session.id, session.id) for session in sessions]


def sessions_hint(logged_in: bool, sessions: Sequence[ChatSession]) -> str:
    if not logged_in:
        return LOGGED_OUT_SESSIONS_TEXT
    if not sessions:
        return NO_SESSIONS_TEXT
    return ""


def manuals_markdown(manuals: Sequence[Manual]) -> str:
    if not manuals:
        return NO_MANUALS_TEXT
    return "\n".join(f"- 📄 {manual.file_name}" for manual in manuals)


def browser_tokens(storage: MutableMapping[str, str]) -> Dict[str, str]:
    """Snapshot of the token mapping to write back into browser storage."""

    return {key: value for key, value in storage.items() if value}


__all__ = [
    "STATUS_CSS",
    "SOURCES_TITLE",
    "browser_tokens",
    "chatbot_messages",
    "format_sources",
    "manuals_markdown",
    "notification_html",
    "session_choices",
    "sessions_hint",
    "status_message",
]

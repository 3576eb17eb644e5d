"""Common dependency helpers wiring the workspace components together."""
from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from functools import lru_cache

import httpx

from .auth.session import SessionStore
from .chat.history import MessageHistory
from .chat.registry import ChatSessionRegistry
from .chat.service import ChatService
from .config import Settings, load_settings
from .documents.registry import DocumentRegistry
from .documents.service import DocumentDashboard
from .infrastructure.http import BackendClient
from .notifications import NotificationCenter
from .recording.bridge import RecordingBridge
from .recording.microphone import BrowserMicrophone, MicrophoneFactory


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""

    return load_settings()


@dataclass
class ChatWorkspace:
    """Per-browser-session bundle of chat components sharing one session context."""

    storage: MutableMapping[str, str]
    notifications: NotificationCenter
    session_store: SessionStore
    chat: ChatService
    recorder: RecordingBridge


@dataclass
class AdminWorkspace:
    """Per-browser-session bundle for the document dashboard."""

    storage: MutableMapping[str, str]
    notifications: NotificationCenter
    session_store: SessionStore
    dashboard: DocumentDashboard


def build_client(settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> BackendClient:
    return BackendClient.from_settings(settings.backend, transport=transport)


def build_chat_workspace(
    storage: MutableMapping[str, str],
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    microphone_factory: MicrophoneFactory = BrowserMicrophone,
) -> ChatWorkspace:
    """Create the chat components around a persisted token mapping."""

    settings = settings or get_settings()
    notifications = NotificationCenter()
    store = SessionStore.for_user(build_client(settings, transport=transport), storage, settings.storage)
    chat = ChatService(store, ChatSessionRegistry(store), MessageHistory(), notifications)
    recorder = RecordingBridge(chat, microphone_factory, settings.recording)
    return ChatWorkspace(
        storage=storage,
        notifications=notifications,
        session_store=store,
        chat=chat,
        recorder=recorder,
    )


def build_admin_workspace(
    storage: MutableMapping[str, str],
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AdminWorkspace:
    """Create the document dashboard around a persisted admin token mapping."""

    settings = settings or get_settings()
    notifications = NotificationCenter()
    store = SessionStore.for_admin(build_client(settings, transport=transport), storage, settings.storage)
    dashboard = DocumentDashboard(store, DocumentRegistry(store), notifications)
    return AdminWorkspace(storage=storage, notifications=notifications, session_store=store, dashboard=dashboard)


__all__ = [
    "AdminWorkspace",
    "ChatWorkspace",
    "build_admin_workspace",
    "build_chat_workspace",
    "build_client",
    "get_settings",
]

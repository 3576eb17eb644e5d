"""Admin dashboard service wrapping the document registry with user feedback."""
from __future__ import annotations

from ..auth.session import SessionStore
from ..exceptions import FrontendError
from ..notifications import NotificationCenter
from .constants import UPLOAD_SUCCESS_MESSAGE
from .exceptions import DocumentAccessError, DocumentListError, DocumentUploadError, UnsupportedFileTypeError
from .registry import DocumentRegistry
from .schemas import Manual


class DocumentDashboard:
    """Track the listing error state and translate failures into notifications."""

    def __init__(
        self,
        session_store: SessionStore,
        registry: DocumentRegistry,
        notifications: NotificationCenter,
    ) -> None:
        self.session_store = session_store
        self.registry = registry
        self.notifications = notifications
        self.error: str | None = None

    @property
    def can_retry(self) -> bool:
        return self.error is not None

    async def login(self, email: str, password: str) -> bool:
        try:
            await self.session_store.login(email, password)
        except FrontendError as exc:
            self.notifications.error("Authentication Error", str(exc))
            return False
        self.notifications.success("Login Successful", "Redirecting to dashboard...")
        await self.refresh()
        return True

    def logout(self) -> None:
        self.session_store.logout()
        self.registry.clear()
        self.error = None

    async def refresh(self) -> list[Manual]:
        """Reload the manual list; on failure remember the error so the UI can offer a retry."""

        self.error = None
        try:
            return await self.registry.list()
        except DocumentAccessError as exc:
            self.error = str(exc)
            self.notifications.error("Error", str(exc))
        except DocumentListError as exc:
            self.error = str(exc)
            self.notifications.error("Error", "Failed to fetch files. Please try again.")
        return []

    async def upload(self, filename: str, content: bytes, content_type: str | None = None) -> Manual | None:
        try:
            manual = await self.registry.upload(filename, content, content_type)
        except (UnsupportedFileTypeError, DocumentUploadError) as exc:
            self.notifications.error("Error", str(exc))
            return None
        self.notifications.success("Success", UPLOAD_SUCCESS_MESSAGE)
        return manual


__all__ = ["DocumentDashboard"]

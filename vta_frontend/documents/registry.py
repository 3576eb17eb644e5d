"""Admin registry of the PDF manuals held by the vector store backend."""
from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

import pydantic

from ..auth.exceptions import NotLoggedInError
from ..auth.session import SessionStore
from ..exceptions import AuthorizationError, FrontendError
from .constants import (
    LIST_FAILED_MESSAGE,
    LIST_PATH,
    LIST_UNAUTHORIZED_MESSAGE,
    PDF_CONTENT_TYPE,
    PDF_ONLY_MESSAGE,
    UPLOAD_FAILED_MESSAGE,
    UPLOAD_PATH,
)
from .exceptions import DocumentAccessError, DocumentListError, DocumentUploadError, UnsupportedFileTypeError
from .schemas import Manual, ManualListResponse

LOGGER = logging.getLogger(__name__)


def is_pdf(filename: str, content_type: str | None = None) -> bool:
    """Decide by content type, falling back to the file name when none is known."""

    resolved = content_type or mimetypes.guess_type(filename)[0]
    return resolved == PDF_CONTENT_TYPE


class DocumentRegistry:
    """List and upload manuals using the admin session."""

    def __init__(self, session_store: SessionStore) -> None:
        self._store = session_store
        self._manuals: list[Manual] = []

    @property
    def manuals(self) -> list[Manual]:
        return list(self._manuals)

    async def list(self) -> list[Manual]:
        try:
            token = self._store.require_token()
            payload = await self._store.client.get_json(LIST_PATH, token=token)
            manuals = ManualListResponse.model_validate(payload).manuals
        except (AuthorizationError, NotLoggedInError) as exc:
            LOGGER.warning("Document listing unauthorized | error=%s", exc)
            raise DocumentAccessError(LIST_UNAUTHORIZED_MESSAGE) from exc
        except (FrontendError, pydantic.ValidationError) as exc:
            LOGGER.warning("Document listing failed | error=%s", exc)
            raise DocumentListError(LIST_FAILED_MESSAGE) from exc
        self._manuals = manuals
        LOGGER.info("Documents listed | count=%d", len(manuals))
        return self.manuals

    async def upload(self, filename: str, content: bytes, content_type: str | None = None) -> Manual:
        """Upload one PDF; anything else is rejected before a request is made."""

        name = Path(filename).name
        if not is_pdf(name, content_type):
            raise UnsupportedFileTypeError(PDF_ONLY_MESSAGE)
        try:
            token = self._store.require_token()
            payload = await self._store.client.post_multipart(
                UPLOAD_PATH,
                {"file": (name, content, PDF_CONTENT_TYPE)},
                token=token,
            )
        except FrontendError as exc:
            detail = getattr(exc, "detail", None)
            LOGGER.warning("Document upload failed | file=%s error=%s", name, exc)
            raise DocumentUploadError(detail or UPLOAD_FAILED_MESSAGE) from exc

        manual = Manual(file_name=str(payload.get("file_name") or name))
        self._manuals.append(manual)
        LOGGER.info("Document uploaded | file=%s bytes=%d", manual.file_name, len(content))
        return manual

    def clear(self) -> None:
        self._manuals = []


__all__ = ["DocumentRegistry", "is_pdf"]
